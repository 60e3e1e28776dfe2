"""Property tests for the view rules."""
