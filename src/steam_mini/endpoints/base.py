"""Base endpoint class and tool registry for the MCP tool surface.

Each endpoint module (ISteamUser, IPlayerService) inherits from BaseEndpoint
and uses the @endpoint decorator to register MCP tools. Tools wrap the
SteamClient endpoint methods and render their results as JSON text.

Example usage:

    from steam_mini.endpoints import BaseEndpoint, endpoint

    class ISteamUser(BaseEndpoint):
        '''Steam User API endpoints.'''

        @endpoint(
            name="get_user",
            description="Get a Steam user's profile summary",
            params={
                "steam_id": {
                    "type": "string",
                    "description": "SteamID64 (17 digits)",
                    "required": True,
                }
            },
        )
        async def get_user(self, steam_id: str) -> str:
            return await self.render(self.client.get_user(steam_id))
"""

import json
import logging
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Coroutine, TypeVar

from mcp.types import Tool, TextContent

from steam_mini.client import SteamClient
from steam_mini.errors import SteamAPIError


logger = logging.getLogger(__name__)

# Type for async endpoint methods
F = TypeVar("F", bound=Callable[..., Coroutine[Any, Any, str]])


@dataclass
class EndpointTool:
    """Metadata for a registered endpoint tool."""

    name: str
    description: str
    input_schema: dict[str, Any]
    handler: Callable[..., Coroutine[Any, Any, str]]
    endpoint_class: type["BaseEndpoint"]


class EndpointRegistry:
    """Registry for all endpoint tools across endpoint modules.

    Tools register themselves at class creation through BaseEndpointMeta;
    EndpointManager looks them up by name when the MCP server routes a call.
    """

    _tools: dict[str, EndpointTool] | None = None
    _endpoint_classes: list[type["BaseEndpoint"]] | None = None

    @classmethod
    def _ensure_initialized(cls) -> None:
        """Ensure registry is initialized (lazy initialization)."""
        if cls._tools is None:
            cls._tools = {}
        if cls._endpoint_classes is None:
            cls._endpoint_classes = []

    @classmethod
    def register_tool(cls, tool: EndpointTool) -> None:
        """Register a tool in the global registry."""
        cls._ensure_initialized()
        assert cls._tools is not None  # For type checker
        if tool.name in cls._tools:
            logger.warning(f"Tool '{tool.name}' already registered, overwriting")
        cls._tools[tool.name] = tool
        logger.debug(f"Registered tool: {tool.name}")

    @classmethod
    def register_endpoint_class(cls, endpoint_class: type["BaseEndpoint"]) -> None:
        """Register an endpoint class for instantiation."""
        cls._ensure_initialized()
        assert cls._endpoint_classes is not None  # For type checker
        if endpoint_class not in cls._endpoint_classes:
            cls._endpoint_classes.append(endpoint_class)

    @classmethod
    def get_tool(cls, name: str) -> EndpointTool | None:
        """Get a tool by name."""
        cls._ensure_initialized()
        assert cls._tools is not None  # For type checker
        return cls._tools.get(name)

    @classmethod
    def get_all_tools(cls) -> list[EndpointTool]:
        """Get all registered tools."""
        cls._ensure_initialized()
        assert cls._tools is not None  # For type checker
        return list(cls._tools.values())

    @classmethod
    def get_mcp_tools(cls) -> list[Tool]:
        """Get all tools in MCP Tool format."""
        return [
            Tool(
                name=tool.name,
                description=tool.description,
                inputSchema=tool.input_schema,
            )
            for tool in cls.get_all_tools()
        ]

    @classmethod
    def clear(cls) -> None:
        """Clear all registered tools (useful for testing)."""
        cls._tools = {}
        cls._endpoint_classes = []


def _build_input_schema(params: dict[str, dict[str, Any]]) -> dict[str, Any]:
    """Build JSON Schema from parameter definitions."""
    properties: dict[str, Any] = {}
    required: list[str] = []

    for name, param in params.items():
        param_dict = {
            "type": param.get("type", "string"),
            "description": param.get("description", ""),
        }
        for key in ("enum", "default", "minimum", "maximum"):
            if key in param:
                param_dict[key] = param[key]
        if param.get("required", True):
            required.append(name)

        properties[name] = param_dict

    return {
        "type": "object",
        "properties": properties,
        "required": required,
    }


def endpoint(
    name: str,
    description: str,
    params: dict[str, dict[str, Any]] | None = None,
) -> Callable[[F], F]:
    """
    Decorator to register a method as an MCP tool endpoint.

    The method will be called with keyword arguments matching the parameter
    names defined in `params`.

    Args:
        name: Tool name (should be unique across all endpoints)
        description: Human-readable description of what the tool does
        params: Dictionary of parameter definitions. Each parameter is a dict
                with keys: type, description, required, enum, default,
                minimum, maximum

    Returns:
        Decorated function
    """
    input_schema = _build_input_schema(params or {})

    def decorator(func: F) -> F:
        # Called directly by EndpointManager, so no wrapper is needed
        func._endpoint_meta = {  # type: ignore[attr-defined]
            "name": name,
            "description": description,
            "input_schema": input_schema,
        }
        return func

    return decorator


class BaseEndpointMeta(type):
    """Metaclass that auto-registers endpoint classes and their tools."""

    def __new__(
        mcs,
        name: str,
        bases: tuple[type, ...],
        namespace: dict[str, Any],
        **kwargs: Any,
    ) -> type:
        cls = super().__new__(mcs, name, bases, namespace, **kwargs)

        # Don't register the base class itself
        if name != "BaseEndpoint" and any(
            isinstance(b, BaseEndpointMeta) for b in bases
        ):
            EndpointRegistry.register_endpoint_class(cls)  # type: ignore[arg-type]

            for attr_value in namespace.values():
                if hasattr(attr_value, "_endpoint_meta"):
                    meta = attr_value._endpoint_meta
                    EndpointRegistry.register_tool(
                        EndpointTool(
                            name=meta["name"],
                            description=meta["description"],
                            input_schema=meta["input_schema"],
                            handler=attr_value,
                            endpoint_class=cls,  # type: ignore[arg-type]
                        )
                    )

        return cls


class BaseEndpoint(metaclass=BaseEndpointMeta):
    """
    Base class for Steam API endpoint modules.

    Attributes:
        client: SteamClient instance for making API calls
    """

    def __init__(self, client: SteamClient) -> None:
        """
        Initialize endpoint with Steam client.

        Args:
            client: SteamClient instance for API calls
        """
        self.client = client

    @staticmethod
    async def render(call: Awaitable[Any]) -> str:
        """
        Await a client call and render the outcome as JSON text.

        Library errors become {"error": message, "kind": kind} so the caller
        can tell validation failures from upstream ones.
        """
        try:
            result = await call
        except SteamAPIError as e:
            payload: dict[str, Any] = {"error": e.message, "kind": e.kind}
            if e.status_code is not None:
                payload["status_code"] = e.status_code
            return json.dumps(payload)
        return json.dumps(result, indent=2)


class EndpointManager:
    """
    Manages endpoint instances and routes tool calls.

    This class is the bridge between the MCP server and endpoint modules.
    """

    def __init__(self, client: SteamClient) -> None:
        """
        Initialize endpoint manager.

        Args:
            client: SteamClient instance shared by all endpoints
        """
        self.client = client
        self._instances: dict[type[BaseEndpoint], BaseEndpoint] = {}

    def _get_instance(self, endpoint_class: type[BaseEndpoint]) -> BaseEndpoint:
        """Get or create an instance of an endpoint class."""
        if endpoint_class not in self._instances:
            self._instances[endpoint_class] = endpoint_class(self.client)
        return self._instances[endpoint_class]

    def get_all_tools(self) -> list[Tool]:
        """Get all registered MCP tools."""
        return EndpointRegistry.get_mcp_tools()

    async def call_tool(
        self, name: str, arguments: dict[str, Any] | None
    ) -> list[TextContent]:
        """
        Route a tool call to the appropriate endpoint handler.

        Args:
            name: Tool name
            arguments: Tool arguments

        Returns:
            List of TextContent with the tool result

        Raises:
            ValueError: If tool is not found
        """
        tool = EndpointRegistry.get_tool(name)
        if not tool:
            raise ValueError(f"Unknown tool: {name}")

        instance = self._get_instance(tool.endpoint_class)

        try:
            result = await tool.handler(instance, **(arguments or {}))
            return [TextContent(type="text", text=result)]
        except Exception as e:
            logger.exception(f"Error executing tool {name}")
            return [TextContent(type="text", text=f"Error: {e}")]
