# =============================================================================
# tests/ - Test Suite
# =============================================================================
# This package contains all tests for the Bookshelf API:
# - test_models.py: Payload/document schema validation
# - test_utils.py: ObjectId parsing and serialization helpers
# - test_resource_store.py: Store outcomes against an in-memory collection
# - test_books_api.py / test_users_api.py: HTTP endpoints via TestClient
# - test_app.py: Root, health, startup and settings
# - fakes.py: In-memory AsyncCollection double
#
# Run tests with: pytest
# =============================================================================
