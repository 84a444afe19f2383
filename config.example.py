# config.example.py

"""
Documentation-only module (safe to commit).

The real configuration is loaded from environment variables (optionally via a local .env file).
Do NOT commit real keys. Use .env (local, gitignored).

This file exists to make the repo self-documenting even without opening .env.example.
"""

ENV_VARS = {
    # App / logging
    "TASKBOARD_APP_NAME": "App display name (default: taskboard).",
    "TASKBOARD_LOG_LEVEL": "Console logging level (default: INFO).",
    "TASKBOARD_DATA_DIR": "Local data directory for logs (default: .local/taskboard).",
    # Backend
    "TASKBOARD_BACKEND_URL": "Project host, e.g. https://<project>.supabase.co (fallback: SUPABASE_URL).",
    "TASKBOARD_API_KEY": "Static API key sent as bearer token and apikey header (fallback: SUPABASE_ANON_KEY).",
    "TASKBOARD_REQUEST_TIMEOUT_SECONDS": "Per-request timeout (default: 15).",
    "TASKBOARD_CONNECT_TIMEOUT_SECONDS": "Connect timeout (default: 5).",
    # Listing
    "TASKBOARD_TASK_PAGE_LIMIT": "Optional max rows per task list request (unset = no limit).",
}
