"""
Shared pytest setup.

config.py builds settings at import time and refuses to start without
credentials, so dummy values are put in place before any test module
imports application code.
"""

import os

os.environ.setdefault("SUPABASE_URL", "https://test.supabase.co")
os.environ.setdefault("SUPABASE_SERVICE_ROLE_KEY", "test.service.key")
os.environ.setdefault("ANTHROPIC_API_KEY", "test-key")
