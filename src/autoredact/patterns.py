"""Built-in regular expressions for sensitive data.

Each category maps to an ordered list of ``(rule_name, pattern)`` pairs. The
category order of ``BUILTIN_PATTERNS`` is the mapping precedence order.
All patterns are case-insensitive.
"""

import re

from .models.entities import Category

# Relaxed TLD (digits allowed) to tolerate OCR noise such as ".i1o"
EMAIL = re.compile(
    r"\b[a-zA-Z0-9][a-zA-Z0-9._%+-]*@[a-zA-Z0-9.-]+\.[a-zA-Z0-9]{2,}\b", re.IGNORECASE
)

# 1-4 digits per group; matches are post-filtered to exactly four groups
IPV4 = re.compile(r"\b(?:\d{1,4}\.){3}\d{1,4}\b", re.IGNORECASE)
IPV6 = re.compile(
    r"(?:[0-9a-fA-F]{1,4}:){7}[0-9a-fA-F]{1,4}"
    r"|(?:[0-9a-fA-F]{1,4}:){1,7}:"
    r"|:(?::[0-9a-fA-F]{1,4}){1,7}"
    r"|::",
    re.IGNORECASE,
)
MAC = re.compile(r"\b(?:[0-9A-Fa-f]{2}[:-]){5}[0-9A-Fa-f]{2}\b", re.IGNORECASE)

# 4-4-4-4, Amex 4-6-5, or a bare 13-19 digit run not joined to a hyphen (UUIDs)
CREDIT_CARD = re.compile(
    r"\b(?:\d{4}[- ]){3}\d{4}\b"
    r"|\b\d{4}[- ]\d{6}[- ]\d{5}\b"
    r"|(?<!-)\b\d{13,19}\b(?!-)",
    re.IGNORECASE,
)
IBAN = re.compile(
    r"\b[A-Z]{2}\d{2} \d{4} \d{4} \d{4} \d{4} \d{2}\b"
    r"|\b[A-Z]{2}\d{2}[a-zA-Z0-9]{11,30}\b",
    re.IGNORECASE,
)
BITCOIN = re.compile(r"\b(?:1|3|bc1)[a-zA-Z0-9]{25,39}\b", re.IGNORECASE)

SSN = re.compile(r"\b\d{3}-\d{2}-\d{4}\b", re.IGNORECASE)
# Indian Permanent Account Number
PAN = re.compile(r"\b[A-Z]{5}[0-9]{4}[A-Z]\b", re.IGNORECASE)

SECRETS = [
    (
        "stripe_aws_github",
        re.compile(
            r"\b((?:sk|pk)_(?:live|test)_[0-9a-zA-Z]{16,}"
            r"|gh[pous]_[0-9a-zA-Z]{30,}"
            r"|AKIA[0-9A-Z]{16,20}"
            r"|wJalrX[A-Za-z0-9+/]{30,})\b",
            re.IGNORECASE,
        ),
    ),
    ("openai_key", re.compile(r"\bsk-[a-zA-Z0-9]{30,}\b", re.IGNORECASE)),
    ("google_api_key", re.compile(r"\bAIza[0-9A-Za-z\-_]{35}\b", re.IGNORECASE)),
    ("slack_token", re.compile(r"\bxox[baprs]-[a-zA-Z0-9-]{10,}\b", re.IGNORECASE)),
    ("jwt", re.compile(r"\beyJ[a-zA-Z0-9_-]*\.[a-zA-Z0-9_-]+\.[a-zA-Z0-9_-]+\b", re.IGNORECASE)),
    (
        "connection_string",
        re.compile(r"(?:postgres|mysql|mongodb|redis|sqlserver)://\S+", re.IGNORECASE),
    ),
    ("private_key", re.compile(r"-----BEGIN [A-Z ]+ PRIVATE KEY-----", re.IGNORECASE)),
]

BUILTIN_PATTERNS = {
    Category.EMAIL: [("email", EMAIL)],
    Category.IP_ADDRESS: [("ipv4", IPV4), ("ipv6", IPV6), ("mac", MAC)],
    Category.FINANCIAL_NUMBER: [
        ("credit_card", CREDIT_CARD),
        ("iban", IBAN),
        ("bitcoin", BITCOIN),
    ],
    Category.PII: [("ssn", SSN), ("pan", PAN)],
    Category.SECRET: SECRETS,
}

# Safe values that are not redacted unless the user removes them
DEFAULT_ALLOWLIST = [
    "localhost",
    "127.0.0.1",
    "::1",
    "192.168.0.1",
    "192.168.1.1",
    "10.0.0.1",
    "8.8.8.8",
    "8.8.4.4",
    "1.1.1.1",
    "1.0.0.1",
]
