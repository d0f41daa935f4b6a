"""Pydantic request and response models for the web API."""
