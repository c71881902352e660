"""Checks /.well-known/mcp.json presence and configuration."""

from __future__ import annotations

import time

from axaudit.checks.base import BaseCheck, build_result, http_detail, parse_json_object
from axaudit.protocols import CheckContext, CheckMeta, CheckResult, Finding


class McpCheck(BaseCheck):
    meta = CheckMeta(
        id="mcp",
        name="MCP (Model Context Protocol)",
        description="Checks /.well-known/mcp.json presence and configuration",
        weight=10,
    )

    async def run(self, ctx: CheckContext) -> CheckResult:
        start = time.perf_counter()
        findings: list[Finding] = []
        score = 100

        res = await ctx.fetch(f"{ctx.url}/.well-known/mcp.json")
        if not res.ok:
            findings.append(
                self.failed(
                    "/.well-known/mcp.json not found",
                    detail=http_detail(res),
                    hint=(
                        "Create a /.well-known/mcp.json file describing your MCP server with name, "
                        "description, tools, and version fields. See https://modelcontextprotocol.io"
                    ),
                )
            )
            return build_result(self.meta, 0, findings, start)

        findings.append(self.passed("/.well-known/mcp.json exists"))

        data, valid = parse_json_object(res.body)
        if not valid or data is None:
            findings.append(self.failed("Invalid JSON", hint="Fix the JSON syntax in your mcp.json file."))
            return build_result(self.meta, 10, findings, start)
        findings.append(self.passed("Valid JSON"))

        if data.get("name"):
            findings.append(self.passed(f'Server name: "{data["name"]}"'))
        else:
            findings.append(
                self.warned("Missing server name", hint='Add a "name" field identifying your MCP server.')
            )
            score -= 10

        if data.get("description"):
            findings.append(self.passed("Server description present"))
        else:
            findings.append(
                self.warned(
                    "Missing server description",
                    hint='Add a "description" field explaining what your MCP server does.',
                )
            )
            score -= 5

        tools = data.get("tools")
        if isinstance(tools, list) and tools:
            findings.append(self.passed(f"{len(tools)} tool(s) defined"))
            described = [tool for tool in tools if isinstance(tool, dict) and tool.get("description")]
            if len(described) == len(tools):
                findings.append(self.passed("All tools have descriptions"))
            elif described:
                findings.append(
                    self.warned(
                        f"{len(described)}/{len(tools)} tools have descriptions",
                        hint='Add a "description" field to each tool.',
                    )
                )
                score -= 5
            else:
                findings.append(
                    self.warned(
                        "No tools have descriptions",
                        hint='Add a "description" field to each tool so agents can choose between them.',
                    )
                )
                score -= 10
        elif isinstance(tools, list):
            findings.append(
                self.warned(
                    "Tools array is empty",
                    hint="Add at least one tool with name, description, and inputSchema fields.",
                )
            )
            score -= 15
        else:
            findings.append(
                self.warned(
                    "No tools array defined",
                    hint='Add a "tools" array. Each tool should have name, description, and inputSchema.',
                )
            )
            score -= 15

        resources = data.get("resources")
        if isinstance(resources, list) and resources:
            findings.append(self.passed(f"{len(resources)} resource(s) defined"))
        else:
            findings.append(
                self.warned(
                    "No resources defined",
                    hint='Add a "resources" array listing the data resources your server exposes.',
                )
            )
            score -= 5

        prompts = data.get("prompts")
        if isinstance(prompts, list) and prompts:
            findings.append(self.passed(f"{len(prompts)} prompt(s) defined"))

        version = data.get("protocolVersion") or data.get("version")
        if version:
            findings.append(self.passed(f"Protocol version: {version}"))
        else:
            findings.append(
                self.warned(
                    "No protocol version specified",
                    hint='Add a "protocolVersion" field (e.g., "2024-11-05").',
                )
            )
            score -= 5

        if data.get("authentication"):
            findings.append(self.passed("Authentication configuration present"))

        if res.headers.get("access-control-allow-origin"):
            findings.append(self.passed("CORS enabled on MCP endpoint"))
        else:
            findings.append(
                self.warned(
                    "No CORS headers on MCP endpoint",
                    hint="Serve /.well-known/mcp.json with Access-Control-Allow-Origin: *",
                )
            )
            score -= 10

        return build_result(self.meta, score, findings, start)
