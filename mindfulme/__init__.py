"""MindfulMe wellness API."""
