"""Page storage and rendering pipeline."""
