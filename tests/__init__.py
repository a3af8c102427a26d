"""
Test suite for the Poultry Feed Cost backend.

Structure:
- unit/: Engine tests on plain records, no database
- integration/: Model, signal, service and API tests
"""
