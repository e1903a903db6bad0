"""Unit tests - every HTTP call is served by a mock."""
