"""Checks /.well-known/agent.json A2A agent card compliance."""

from __future__ import annotations

import time

from axaudit.checks.base import BaseCheck, build_result, http_detail, parse_json_object
from axaudit.constants import AGENT_JSON_REQUIRED_FIELDS
from axaudit.protocols import CheckContext, CheckMeta, CheckResult, Finding

OPTIONAL_FIELDS = ("capabilities", "authentication", "documentationUrl")


class AgentJsonCheck(BaseCheck):
    meta = CheckMeta(
        id="agent-json",
        name="Agent Card (A2A)",
        description="Checks /.well-known/agent.json A2A protocol compliance",
        weight=10,
    )

    async def run(self, ctx: CheckContext) -> CheckResult:
        start = time.perf_counter()
        findings: list[Finding] = []
        score = 100

        res = await ctx.fetch(f"{ctx.url}/.well-known/agent.json")
        if not res.ok:
            findings.append(
                self.failed(
                    "/.well-known/agent.json not found",
                    detail=http_detail(res),
                    hint=(
                        "Create a /.well-known/agent.json file following the A2A (Agent-to-Agent) protocol "
                        "with name, description, url, and skills fields."
                    ),
                )
            )
            return build_result(self.meta, 0, findings, start)

        findings.append(self.passed("/.well-known/agent.json exists"))

        data, valid = parse_json_object(res.body)
        if not valid or data is None:
            findings.append(
                self.failed("Invalid JSON", hint="Fix the JSON syntax in your agent.json file.")
            )
            return build_result(self.meta, 10, findings, start)
        findings.append(self.passed("Valid JSON"))

        for name in AGENT_JSON_REQUIRED_FIELDS:
            if data.get(name) is not None:
                findings.append(self.passed(f'Required field "{name}" present'))
            else:
                findings.append(
                    self.failed(
                        f'Required field "{name}" missing',
                        hint=f'Add the "{name}" field to your agent.json. The A2A protocol requires it.',
                    )
                )
                score -= 15

        skills = data.get("skills")
        if isinstance(skills, list) and skills:
            findings.append(self.passed(f"{len(skills)} skill(s) defined"))
        elif isinstance(skills, list):
            findings.append(
                self.warned(
                    "Skills array is empty",
                    hint="Add at least one skill describing what your agent or site can do.",
                )
            )
            score -= 10

        if data.get("protocolVersion"):
            findings.append(self.passed(f"Protocol version: {data['protocolVersion']}"))
        else:
            findings.append(
                self.warned(
                    "No protocolVersion field",
                    hint='Add "protocolVersion": "0.2.0" to declare A2A protocol compatibility.',
                )
            )
            score -= 5

        present = [name for name in OPTIONAL_FIELDS if name in data]
        if len(present) == len(OPTIONAL_FIELDS):
            findings.append(
                self.passed("All optional fields present (capabilities, authentication, documentationUrl)")
            )
        elif present:
            findings.append(self.passed(f"{len(present)}/{len(OPTIONAL_FIELDS)} optional fields present"))
        else:
            findings.append(
                self.warned(
                    "No optional fields (capabilities, authentication, documentationUrl)",
                    hint="Consider adding capabilities, authentication, and documentationUrl.",
                )
            )
            score -= 5

        return build_result(self.meta, score, findings, start)
