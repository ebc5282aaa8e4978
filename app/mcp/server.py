"""FastMCP server instance – mounted inside FastAPI."""

from fastmcp import FastMCP

mcp = FastMCP(
    name="StudyTracker",
    instructions=(
        "Study Tracker tools for reading a child's daily task list, calendar completion "
        "grid and study-minute summaries, and for saving a day's study logs. "
        "Every tool takes x_user_id, the id of the parent account that owns the child."
    ),
)

# Import tool modules to register @mcp.tool decorators
from app.mcp.tools import study_tools  # noqa: E402, F401
