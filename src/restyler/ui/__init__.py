"""Gradio user interface for Restyler."""
