from .main import run_tool

run_tool()
