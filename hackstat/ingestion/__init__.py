"""Collaborator sources feeding the rating blender."""
