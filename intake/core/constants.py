"""
Constants
Centralised storage for slot names, severity levels, and extraction keywords.
"""
SEVERITY = "severity"
REPRODUCIBILITY = "reproducibility"
EVIDENCE = "evidence"
AFFECTED_COMPONENTS = "affected_components"

# Question priority: the first missing field in this order is asked next.
SLOT_FIELDS = (SEVERITY, REPRODUCIBILITY, EVIDENCE, AFFECTED_COMPONENTS)

# Scan order doubles as precedence when several levels appear in one answer.
SEVERITY_LEVELS = ("critical", "high", "medium", "low")

# evidence flag → keyword looked for in the user's answer
EVIDENCE_KEYWORDS = {
    "screenshots": "screenshot",
    "logs": "log",
    "videos": "video",
}

CHECK_MARK = "✓"
CROSS_MARK = "✗"
