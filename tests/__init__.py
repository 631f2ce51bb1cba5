"""
textcheck Tests Package
=======================
Test suite for the checking orchestrator and its engines.

Run all tests: python3 -m pytest tests/ -v
Run specific: python3 -m pytest tests/test_service.py -v
"""
