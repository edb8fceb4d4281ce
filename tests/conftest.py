"""Shared test setup.

The LLM client is built when ``services.llm_service`` is imported, so the
provider and credentials are pinned here before any test module imports
the app.  Nothing in the suite talks to a real provider.
"""

import os

os.environ["LLM_PROVIDER"] = "groq"
os.environ["GROQ_API_KEY"] = "test-key"
os.environ.setdefault("OPENAI_API_KEY", "test-key")
os.environ.pop("INTERNAL_TOKEN", None)
