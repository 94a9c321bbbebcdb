"""Prompt Writer backend: template library and AI model recommendations."""
