# config.example.py

"""
Documentation-only module (safe to commit).

The real configuration is loaded from environment variables (optionally via a local .env file).
Do NOT commit the deployed store URL if the sheet is private. Use .env (local, gitignored).

This file exists to make the repo self-documenting even without opening .env.example.
"""

ENV_VARS = {
    # App / logging
    "TASKFLOW_APP_NAME": "App display name (default: taskflow).",
    "TASKFLOW_LOG_LEVEL": "Console logging level (default: INFO).",
    # Store endpoint
    "TASKFLOW_STORE_URL": "Spreadsheet web-app URL (GET ?sheet=..&action=fetch, POST form writes).",
    "TASKFLOW_TASK_SHEET": "Task sheet name (default: Master).",
    "TASKFLOW_ROSTER_SHEET": "Doer roster sheet name (default: Doers).",
    "TASKFLOW_HTTP_TIMEOUT_SECONDS": "HTTP timeout per request (default: 30).",
    # Connectors
    "TASKFLOW_CONSOLE_ENABLED": "Run the interactive console (true/false, default: true).",
    # Paths (gitignored)
    "TASKFLOW_DATA_DIR": "Local data directory for logs (default: .local/taskflow).",
}
