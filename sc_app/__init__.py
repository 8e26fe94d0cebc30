"""Application layer: AWS CLI access, command store, command building."""
