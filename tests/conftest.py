"""Root conftest — shared test configuration."""

import os

# Ensure tests never reach a real Supabase project
os.environ.setdefault("SUPABASE_URL", "http://supabase.test")
os.environ.setdefault("SUPABASE_KEY", "test-service-role-key")
os.environ.setdefault("LOG_FORMAT", "text")
