"""slnsync - Round-trip .sln parsing, project merging and regeneration."""

from slnsync.solution.merger import merge_projects
from slnsync.solution.parser import parse_solution, parse_solution_text
from slnsync.solution.serializer import serialize_solution

__version__ = "0.1.0"
__all__ = ["merge_projects", "parse_solution", "parse_solution_text", "serialize_solution"]
