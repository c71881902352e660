"""Checks /.well-known/openapi.json presence and validity."""

from __future__ import annotations

import time

from axaudit.checks.base import BaseCheck, build_result, http_detail, parse_json_object
from axaudit.protocols import CheckContext, CheckMeta, CheckResult, Finding


class OpenApiCheck(BaseCheck):
    meta = CheckMeta(
        id="openapi",
        name="OpenAPI Spec",
        description="Checks /.well-known/openapi.json presence and validity",
        weight=8,
    )

    async def run(self, ctx: CheckContext) -> CheckResult:
        start = time.perf_counter()
        findings: list[Finding] = []
        score = 100

        res = await ctx.fetch(f"{ctx.url}/.well-known/openapi.json")
        if not res.ok:
            findings.append(self.failed("/.well-known/openapi.json not found", detail=http_detail(res)))
            return build_result(self.meta, 0, findings, start)

        findings.append(self.passed("/.well-known/openapi.json exists"))

        data, valid = parse_json_object(res.body)
        if not valid or data is None:
            findings.append(self.failed("Invalid JSON"))
            return build_result(self.meta, 10, findings, start)
        findings.append(self.passed("Valid JSON"))

        if data.get("openapi"):
            findings.append(self.passed(f"OpenAPI version: {data['openapi']}"))
        elif data.get("swagger"):
            findings.append(
                self.warned(f"Swagger version: {data['swagger']} (consider upgrading to OpenAPI 3.x)")
            )
            score -= 10
        else:
            findings.append(self.failed("No openapi or swagger version field"))
            score -= 20

        info = data.get("info")
        if not isinstance(info, dict):
            info = {}

        if info.get("title"):
            findings.append(self.passed(f'API title: "{info["title"]}"'))
        else:
            findings.append(self.warned("Missing info.title"))
            score -= 10

        if info.get("description"):
            findings.append(self.passed("API description present"))
        else:
            findings.append(self.warned("Missing info.description"))
            score -= 5

        paths = data.get("paths")
        if isinstance(paths, dict) and paths:
            findings.append(self.passed(f"{len(paths)} path(s) documented"))
        else:
            findings.append(self.warned("No paths documented"))
            score -= 15

        servers = data.get("servers")
        if isinstance(servers, list) and servers:
            findings.append(self.passed(f"{len(servers)} server(s) defined"))
        else:
            findings.append(self.warned("No servers defined"))
            score -= 5

        return build_result(self.meta, score, findings, start)
