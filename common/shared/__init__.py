"""Configuration loading and cross-module helpers."""
