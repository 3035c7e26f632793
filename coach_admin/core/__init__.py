"""
Core business logic for the coach admin panel.

This module is framework-agnostic - it doesn't import FastAPI, httpx,
or any storage concerns. Validation and filtering can be tested in
isolation and reused by both the server and the client.
"""
