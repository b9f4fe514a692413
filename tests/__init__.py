"""
Test suite for the Inventory Planning Engine.

Run all tests: pytest
Run unit tests only: pytest tests/unit/
Run specific file: pytest tests/unit/test_velocity_service.py -v
"""
