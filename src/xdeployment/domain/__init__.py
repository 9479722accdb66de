"""Domain models for the XDeployment composite and its function input."""
