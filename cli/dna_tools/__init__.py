"""AppDNA model tools: MCP tool runner for the model host bridge."""

__version__ = "0.1.0"
