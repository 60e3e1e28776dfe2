"""View rule and catalog tests."""
