"""Knee X-ray classification web app."""
