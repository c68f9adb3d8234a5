"""
Configuration
=============
Loads environment variables from .env file using python-dotenv.

Environment Variables:
    SESSION_GRACE_SECONDS     — Seconds a finished session is kept before eviction (default: 1800)
    SESSION_IDLE_TTL_SECONDS  — Seconds an untouched session survives (default: 86400)
    SESSION_PURGE_INTERVAL_SECONDS — Period of the background expired-session sweep (default: 60)
    TICKET_ID_PREFIX          — Prefix of generated ticket identifiers (default: TICKET)
    USE_EXTERNAL_SERVICES     — Dispatch confirmed tickets to Jira / Slack (default: false)
    JIRA_API_URL              — Jira base URL, e.g. https://acme.atlassian.net
    JIRA_EMAIL                — Jira account email for basic auth
    JIRA_API_TOKEN            — Jira API token for basic auth
    JIRA_PROJECT_KEY          — Jira project receiving new issues
    JIRA_REPRODUCIBILITY_FIELD — Jira custom field id for reproducibility, e.g. customfield_10001 (default: unset)
    SLACK_WEBHOOK_URL         — Slack incoming webhook for new-ticket notifications
    HTTP_TIMEOUT_SECONDS      — Timeout for every outbound HTTP call (default: 20)
    LOG_LEVEL                 — Root log level (default: INFO)
    LOG_DIR                   — Directory for daily log files, empty disables file logging (default: logs)

Dispatch Philosophy:
    External services are only contacted after a ticket is confirmed and
    finalized. Their failures are logged and never change the dialogue result.
"""
import os
from dotenv import load_dotenv

load_dotenv()

SESSION_GRACE_SECONDS = int(os.getenv("SESSION_GRACE_SECONDS", 30 * 60))
SESSION_IDLE_TTL_SECONDS = int(os.getenv("SESSION_IDLE_TTL_SECONDS", 24 * 60 * 60))
SESSION_PURGE_INTERVAL_SECONDS = int(os.getenv("SESSION_PURGE_INTERVAL_SECONDS", 60))

TICKET_ID_PREFIX = os.getenv("TICKET_ID_PREFIX", "TICKET")

USE_EXTERNAL_SERVICES = os.getenv("USE_EXTERNAL_SERVICES", "false").lower() == "true"

# Jira sink
JIRA_API_URL = os.getenv("JIRA_API_URL")
JIRA_EMAIL = os.getenv("JIRA_EMAIL", "")
JIRA_API_TOKEN = os.getenv("JIRA_API_TOKEN", "")
JIRA_PROJECT_KEY = os.getenv("JIRA_PROJECT_KEY", "")
# Reproducibility has no standard Jira field; left out of the payload when unset
JIRA_REPRODUCIBILITY_FIELD = os.getenv("JIRA_REPRODUCIBILITY_FIELD", "")

# Slack sink
SLACK_WEBHOOK_URL = os.getenv("SLACK_WEBHOOK_URL")

HTTP_TIMEOUT_SECONDS = float(os.getenv("HTTP_TIMEOUT_SECONDS", 20))

# Logging
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
LOG_DIR = os.getenv("LOG_DIR", "logs")
