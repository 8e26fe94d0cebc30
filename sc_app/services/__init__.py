"""Application services for ssm-commander."""
