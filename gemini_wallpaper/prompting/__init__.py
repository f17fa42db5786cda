"""Prompting package.

This package contains deterministic prompt-construction helpers for the context
and image steps of the wallpaper cycle. It does not perform model invocation or
response parsing.
"""
