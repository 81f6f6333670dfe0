"""Landmark index spaces and reference selection."""
