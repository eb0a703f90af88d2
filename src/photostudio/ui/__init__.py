"""Gradio user interface for PhotoStudio."""
