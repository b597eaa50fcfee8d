"""Base endpoint class and tool registry.

Endpoint classes inherit from BaseEndpoint and mark async methods with the
@endpoint decorator; the metaclass registers each one as an MCP tool.

Example usage:

    from steamid_mcp.endpoints import BaseEndpoint, endpoint

    class SteamIDTools(BaseEndpoint):
        '''Steam ID conversion tools.'''

        @endpoint(
            name="resolve_steam_id",
            description="Resolve any Steam ID or vanity name to SteamID64",
            params={
                "steam_id": {
                    "type": "string",
                    "description": "Steam ID in any format, or a vanity name",
                    "required": True,
                }
            },
        )
        async def resolve_steam_id(self, steam_id: str) -> str:
            resolved = await self.client.resolve(steam_id)
            return str(resolved.to_u64())
"""

import logging
from dataclasses import dataclass
from typing import Any, Callable, Coroutine, TypeVar

from mcp.types import Tool, TextContent

from steamid_mcp.lookup import LookupClient


logger = logging.getLogger(__name__)

F = TypeVar("F", bound=Callable[..., Coroutine[Any, Any, str]])


@dataclass
class EndpointTool:
    """Metadata for a registered endpoint tool."""

    name: str
    description: str
    input_schema: dict[str, Any]
    handler: Callable[..., Coroutine[Any, Any, str]]
    endpoint_class: type["BaseEndpoint"]
    supports_json: bool = False


class EndpointRegistry:
    """Class-level table of every tool defined by an endpoint module."""

    _tools: dict[str, EndpointTool] | None = None
    _endpoint_classes: list[type["BaseEndpoint"]] | None = None

    @classmethod
    def _ensure_initialized(cls) -> None:
        if cls._tools is None:
            cls._tools = {}
        if cls._endpoint_classes is None:
            cls._endpoint_classes = []

    @classmethod
    def register_tool(cls, tool: EndpointTool) -> None:
        cls._ensure_initialized()
        assert cls._tools is not None  # For type checker
        if tool.name in cls._tools:
            logger.warning(f"Tool '{tool.name}' registered twice, keeping the latest")
        cls._tools[tool.name] = tool
        logger.debug(f"Registered tool: {tool.name}")

    @classmethod
    def register_endpoint_class(cls, endpoint_class: type["BaseEndpoint"]) -> None:
        cls._ensure_initialized()
        assert cls._endpoint_classes is not None  # For type checker
        if endpoint_class not in cls._endpoint_classes:
            cls._endpoint_classes.append(endpoint_class)

    @classmethod
    def get_tool(cls, name: str) -> EndpointTool | None:
        cls._ensure_initialized()
        assert cls._tools is not None  # For type checker
        return cls._tools.get(name)

    @classmethod
    def get_mcp_tools(cls) -> list[Tool]:
        """Describe every registered tool as an MCP ``Tool``."""
        cls._ensure_initialized()
        assert cls._tools is not None  # For type checker
        return [
            Tool(
                name=tool.name,
                description=tool.description,
                inputSchema=tool.input_schema,
            )
            for tool in cls._tools.values()
        ]

    @classmethod
    def clear(cls) -> None:
        """Forget every registered tool and endpoint class."""
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
        for key in ("enum", "default"):
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
    supports_json: bool = False,
) -> Callable[[F], F]:
    """
    Mark an async method as an MCP tool.

    Args:
        name: Tool name (unique across all endpoints)
        description: Human-readable description of what the tool does
        params: Parameter definitions with keys: type, description, required,
                enum, default
        supports_json: Add a 'format' parameter switching between 'text'
                       and 'json' output
    """
    params = params or {}

    if supports_json:
        params = dict(params)
        params["format"] = {
            "type": "string",
            "description": "Output format: 'text' for human-readable output, 'json' for structured JSON",
            "enum": ["text", "json"],
            "default": "text",
            "required": False,
        }

    input_schema = _build_input_schema(params)

    def decorator(func: F) -> F:
        func._endpoint_meta = {  # type: ignore[attr-defined]
            "name": name,
            "description": description,
            "input_schema": input_schema,
            "supports_json": supports_json,
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
                            supports_json=meta["supports_json"],
                        )
                    )

        return cls


class BaseEndpoint(metaclass=BaseEndpointMeta):
    """
    Base class for endpoint modules.

    Attributes:
        client: LookupClient used to resolve vanity names and fetch profiles
    """

    def __init__(self, client: LookupClient) -> None:
        self.client = client


class EndpointManager:
    """Instantiates endpoint classes and routes tool calls to them."""

    def __init__(self, client: LookupClient) -> None:
        self.client = client
        self._instances: dict[type[BaseEndpoint], BaseEndpoint] = {}

    def _get_instance(self, endpoint_class: type[BaseEndpoint]) -> BaseEndpoint:
        if endpoint_class not in self._instances:
            self._instances[endpoint_class] = endpoint_class(self.client)
        return self._instances[endpoint_class]

    def get_all_tools(self) -> list[Tool]:
        return EndpointRegistry.get_mcp_tools()

    async def call_tool(
        self, name: str, arguments: dict[str, Any] | None
    ) -> list[TextContent]:
        """
        Route a tool call to the appropriate endpoint handler.

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
