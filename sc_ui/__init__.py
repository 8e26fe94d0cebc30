"""Interactive front end for ssm-commander: search prompt, presenters and CLI."""
