"""Slash commands exposing the roster to players."""
