"""HTTP service for the Idea Graph import pipeline."""
