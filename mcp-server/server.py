#!/usr/bin/env python3
"""MCP Server for the Foreign Service Separation Calculator.

This server exposes severance, FSPS retirement and health insurance
calculations as MCP tools, allowing AI assistants to answer questions
about an employee's separation options.
"""

import os
import sys
import json
import asyncio
from typing import Any

# Add src to path for imports
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'src'))

from mcp.server import Server
from mcp.server.stdio import stdio_server
from mcp.types import Tool, TextContent

from tools import MultiProgramTools


# Create the MCP server
server = Server("fs-separation-calculator")

# Global tools instance (initialized on startup)
tools: MultiProgramTools | None = None


def get_tools() -> MultiProgramTools:
    """Get or initialize the tools instance."""
    global tools
    if tools is None:
        # Default program can be set via FS_SEPARATION_PROGRAM env var
        default_program = os.environ.get('FS_SEPARATION_PROGRAM')
        base_path = os.path.join(os.path.dirname(__file__), '..')
        tools = MultiProgramTools(base_path, default_program)
    return tools


# Common program parameter schema
PROGRAM_PARAM = {
    "type": "string",
    "description": "The program name (folder in input-parameters). If not specified, uses the default program. Use list_programs to see available programs."
}

EMPLOYEE_PROPERTIES = {
    "grade": {"type": "string", "description": "Foreign Service grade: FS-01 through FS-04, or SFS"},
    "step": {"type": "integer", "description": "Step 1-14 (for SFS, the rank step 1-14)"},
    "years_service": {"type": "number", "description": "Creditable years of service"},
    "age": {"type": "number", "description": "Current age in years"},
    "as_of": {"type": "string", "description": "Optional calculation date (YYYY-MM-DD); defaults to today"},
}

NO_PARAMS = {"type": "object", "properties": {}, "required": []}
PROGRAM_ONLY = {"type": "object", "properties": {"program": PROGRAM_PARAM}, "required": []}


@server.list_tools()
async def list_tools() -> list[Tool]:
    """List available separation calculator tools."""
    return [
        Tool(
            name="list_programs",
            description="List all available separation programs. Use this to see which programs are available and their basic info.",
            inputSchema=NO_PARAMS
        ),
        Tool(
            name="reload_programs",
            description="Reload all programs from disk. Use this after adding, modifying, or removing program spec.json files to refresh the cache without restarting the server.",
            inputSchema=NO_PARAMS
        ),
        Tool(
            name="get_program_overview",
            description="Get an overview of the employee: grade, step, age, years of service, post, and any discrepancy between the manual years and the service computation date.",
            inputSchema=PROGRAM_ONLY
        ),
        Tool(
            name="get_severance",
            description="Get severance pay (one month of base pay per year of service, capped at one year of base pay), its three annual installments, and the annual leave payout.",
            inputSchema=PROGRAM_ONLY
        ),
        Tool(
            name="get_retirement_scenarios",
            description="Get all four FSPS retirement scenarios (immediate, TERA, MRA+10, deferred) with eligibility, annuity percentage, annual/monthly annuity and special retirement supplement.",
            inputSchema=PROGRAM_ONLY
        ),
        Tool(
            name="get_best_scenario",
            description="Get the eligible retirement scenario with the highest annual annuity.",
            inputSchema=PROGRAM_ONLY
        ),
        Tool(
            name="get_health_comparison",
            description="Compare current FEHB premiums against COBRA continuation and an ACA marketplace estimate, with recommendations.",
            inputSchema=PROGRAM_ONLY
        ),
        Tool(
            name="get_report",
            description="Get the complete separation report: overview, severance, retirement scenarios and health comparison.",
            inputSchema=PROGRAM_ONLY
        ),
        Tool(
            name="compare_programs",
            description="Compare two programs on severance amount and best monthly annuity, reporting which one comes out ahead on each metric.",
            inputSchema={
                "type": "object",
                "properties": {
                    "program1": {
                        "type": "string",
                        "description": "First program name to compare"
                    },
                    "program2": {
                        "type": "string",
                        "description": "Second program name to compare"
                    }
                },
                "required": ["program1", "program2"]
            }
        ),
        Tool(
            name="calculate_severance",
            description="Calculate severance pay from raw inputs without a saved program.",
            inputSchema={
                "type": "object",
                "properties": {
                    **EMPLOYEE_PROPERTIES,
                    "annual_leave_hours": {"type": "number", "description": "Unused annual leave balance in hours"},
                    "service_computation_date": {"type": "string", "description": "Optional service computation date (YYYY-MM-DD)"},
                },
                "required": ["grade", "step", "years_service", "age"]
            }
        ),
        Tool(
            name="calculate_annuity",
            description="Calculate FSPS retirement scenarios from raw inputs without a saved program.",
            inputSchema={
                "type": "object",
                "properties": {
                    **EMPLOYEE_PROPERTIES,
                    "high_three": {
                        "type": "array",
                        "items": {"type": "number"},
                        "description": "Three highest consecutive annual salaries"
                    },
                    "tera_eligible": {"type": "boolean", "description": "Whether a TERA offer is available"},
                    "tera_years_required": {"type": "integer", "description": "Minimum years of service for TERA (default 10)"},
                    "tera_age_required": {"type": "integer", "description": "Minimum age for TERA (default 43)"},
                    "sick_leave_hours": {"type": "number", "description": "Unused sick leave hours credited toward service"},
                    "service_computation_date": {"type": "string", "description": "Optional service computation date (YYYY-MM-DD)"},
                },
                "required": ["grade", "step", "years_service", "age"]
            }
        ),
        Tool(
            name="calculate_health",
            description="Compare FEHB, COBRA and ACA costs for a plan, coverage type and state.",
            inputSchema={
                "type": "object",
                "properties": {
                    "plan": {"type": "string", "description": "FEHB plan key, e.g. GEHA-standard"},
                    "coverage_type": {"type": "string", "description": "self, self-plus-one or family"},
                    "state": {"type": "string", "description": "Two-letter state code; unknown or missing states use the national default"}
                },
                "required": ["plan", "coverage_type"]
            }
        ),
    ]


@server.call_tool()
async def call_tool(name: str, arguments: dict[str, Any]) -> list[TextContent]:
    """Handle tool calls."""
    try:
        fs_tools = get_tools()
        program = arguments.get("program")

        if name == "list_programs":
            result = fs_tools.list_programs()
        elif name == "reload_programs":
            result = fs_tools.reload_programs()
        elif name == "get_program_overview":
            result = fs_tools.get_program_overview(program)
        elif name == "get_severance":
            result = fs_tools.get_severance(program)
        elif name == "get_retirement_scenarios":
            result = fs_tools.get_retirement_scenarios(program)
        elif name == "get_best_scenario":
            result = fs_tools.get_best_scenario(program)
        elif name == "get_health_comparison":
            result = fs_tools.get_health_comparison(program)
        elif name == "get_report":
            result = fs_tools.get_report(program)
        elif name == "compare_programs":
            result = fs_tools.compare_programs(arguments["program1"], arguments["program2"])
        elif name == "calculate_severance":
            result = fs_tools.calculate_severance(
                arguments["grade"],
                arguments["step"],
                arguments["years_service"],
                arguments["age"],
                annual_leave_hours=arguments.get("annual_leave_hours", 0),
                service_computation_date=arguments.get("service_computation_date"),
                as_of=arguments.get("as_of"),
            )
        elif name == "calculate_annuity":
            result = fs_tools.calculate_annuity(
                arguments["grade"],
                arguments["step"],
                arguments["years_service"],
                arguments["age"],
                high_three=arguments.get("high_three"),
                tera_eligible=arguments.get("tera_eligible", False),
                tera_years_required=arguments.get("tera_years_required", 10),
                tera_age_required=arguments.get("tera_age_required", 43),
                sick_leave_hours=arguments.get("sick_leave_hours", 0),
                service_computation_date=arguments.get("service_computation_date"),
                as_of=arguments.get("as_of"),
            )
        elif name == "calculate_health":
            result = fs_tools.calculate_health(
                arguments["plan"], arguments["coverage_type"], arguments.get("state")
            )
        else:
            result = {"error": f"Unknown tool: {name}"}

        return [TextContent(
            type="text",
            text=json.dumps(result, indent=2, default=str)
        )]
    except Exception as e:
        return [TextContent(
            type="text",
            text=json.dumps({"error": str(e)}, indent=2)
        )]


async def main():
    """Run the MCP server."""
    async with stdio_server() as (read_stream, write_stream):
        await server.run(read_stream, write_stream, server.create_initialization_options())


if __name__ == "__main__":
    asyncio.run(main())
