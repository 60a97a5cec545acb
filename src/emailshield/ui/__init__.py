"""Gradio demo UI."""
