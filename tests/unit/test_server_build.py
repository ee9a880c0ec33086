import mcp.types as types

from cerebro_mcp.dispatcher import Dispatcher
from cerebro_mcp.server import SERVER_INSTRUCTIONS, SERVER_NAME, build_server
from tests.helpers.fakes import RecordingFetcher


def test_build_server_registers_tool_handlers():
    server = build_server(Dispatcher(RecordingFetcher()))

    assert server.name == SERVER_NAME
    assert server.instructions == SERVER_INSTRUCTIONS
    assert types.ListToolsRequest in server.request_handlers
    assert types.CallToolRequest in server.request_handlers


def test_initialization_options_enable_tools():
    options = build_server(Dispatcher(RecordingFetcher())).create_initialization_options()
    assert options.server_name == "cerebro"
    assert options.capabilities.tools is not None
