"""Checks /.well-known/security.txt RFC 9116 compliance."""

from __future__ import annotations

import re
import time
from datetime import datetime, timezone
from typing import Optional

from axaudit.checks.base import BaseCheck, build_result, http_detail
from axaudit.constants import SECURITY_TXT_REQUIRED_FIELDS
from axaudit.protocols import CheckContext, CheckMeta, CheckResult, Finding

OPTIONAL_FIELDS = ("Canonical", "Preferred-Languages", "Policy", "Encryption", "Hiring")
EXPIRES_LINE = re.compile(r"^Expires:\s*(.+)", re.IGNORECASE | re.MULTILINE)

FIELD_HINTS = {
    "Contact": "Use a mailto: or https: URI, e.g., Contact: mailto:security@example.com",
    "Expires": "Use an ISO 8601 date, e.g., Expires: 2026-12-31T23:59:59.000Z",
}


def has_field(text: str, name: str) -> bool:
    return re.search(rf"^{re.escape(name)}:", text, re.IGNORECASE | re.MULTILINE) is not None


def parse_expires(value: str) -> Optional[datetime]:
    try:
        parsed = datetime.fromisoformat(value.strip())
    except ValueError:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


class SecurityTxtCheck(BaseCheck):
    meta = CheckMeta(
        id="security-txt",
        name="Security.txt",
        description="Checks /.well-known/security.txt RFC 9116 compliance",
        weight=8,
    )

    async def run(self, ctx: CheckContext) -> CheckResult:
        start = time.perf_counter()
        findings: list[Finding] = []
        score = 100

        res = await ctx.fetch(f"{ctx.url}/.well-known/security.txt")
        if not res.ok:
            findings.append(
                self.failed(
                    "/.well-known/security.txt not found",
                    detail=http_detail(res),
                    hint=(
                        "Create a /.well-known/security.txt file per RFC 9116 with at least Contact: and "
                        "Expires: fields. See https://securitytxt.org/"
                    ),
                )
            )
            return build_result(self.meta, 0, findings, start)

        findings.append(self.passed("/.well-known/security.txt exists"))
        text = res.body

        for name in SECURITY_TXT_REQUIRED_FIELDS:
            if has_field(text, name):
                findings.append(self.passed(f'Required field "{name}" present'))
            else:
                findings.append(
                    self.failed(
                        f'Required field "{name}" missing (RFC 9116)',
                        hint=f'Add "{name}:" to your security.txt. {FIELD_HINTS.get(name, "")}'.strip(),
                    )
                )
                score -= 25

        match = EXPIRES_LINE.search(text)
        expires = parse_expires(match.group(1)) if match else None
        if expires is not None:
            if expires > datetime.now(timezone.utc):
                day = expires.astimezone(timezone.utc).date().isoformat()
                findings.append(self.passed(f"Expires date is in the future ({day})"))
            else:
                findings.append(
                    self.failed(
                        "Expires date is in the past: security.txt is expired",
                        hint="Update the Expires field to a future date.",
                    )
                )
                score -= 20

        present = [name for name in OPTIONAL_FIELDS if has_field(text, name)]
        if present:
            findings.append(self.passed(f"{len(present)}/{len(OPTIONAL_FIELDS)} optional fields present"))
        else:
            findings.append(
                self.warned(
                    "No optional fields (Canonical, Preferred-Languages, Policy, etc.)",
                    hint="Consider adding Canonical:, Preferred-Languages:, and Policy: fields.",
                )
            )
            score -= 5

        return build_result(self.meta, score, findings, start)
