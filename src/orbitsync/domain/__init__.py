"""Domain layer: note/member model, ports and the reconciliation core."""
