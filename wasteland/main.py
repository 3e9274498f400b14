"""Main entry point for the Wasteland Survivor MCP Server."""

import sys
from typing import Any, Dict, Optional

from mcp.server.fastmcp import FastMCP
from returns.result import Failure

from config.logging_config import get_logger, setup_logging
from config.settings import Settings, settings
from wasteland.character_creation.builder import CharacterBuilder
from wasteland.character_creation.mcp_tools import initialize_creation_tools, register_creation_tools
from wasteland.core.notifications import HealthChange, HealthNotifier
from wasteland.events.event_manager import EventManager
from wasteland.events.mcp_tools import initialize_event_tools, register_event_tools
from wasteland.inventory.custom_items import CustomItemLibrary
from wasteland.inventory.inventory_manager import InventoryManager
from wasteland.inventory.mcp_tools import initialize_inventory_tools, register_inventory_tools
from wasteland.persistence.kv_store import InMemoryKeyValueStore, JsonFileKeyValueStore, KeyValueStore
from wasteland.persistence.mcp_tools import initialize_save_tools, register_save_tools
from wasteland.persistence.save_store import SaveStore
from wasteland.progression.health import HealthTracker
from wasteland.progression.level_up import ProgressionEngine
from wasteland.progression.mcp_tools import initialize_progression_tools, register_progression_tools

# Set up logging
setup_logging(
    level="DEBUG" if settings.debug else settings.log_level,
    log_file=settings.log_file,
    stdio_mode=settings.mcp_stdio_mode,
)
logger = get_logger(__name__)

# Initialize FastMCP server
mcp = FastMCP("Wasteland Survivor")

# Shared components (initialized in main())
save_store: Optional[SaveStore] = None


def create_store(config: Settings) -> KeyValueStore:
    """Build the key-value backend selected in settings."""
    if config.storage_backend == "memory":
        logger.warning("Using in-memory storage, saves will not survive a restart")
        return InMemoryKeyValueStore()
    return JsonFileKeyValueStore(config.data_dir)


def log_health_change(change: HealthChange) -> None:
    logger.info("Health updated", **change.to_dict())


def build_components(config: Settings, store: Optional[KeyValueStore] = None) -> Dict[str, Any]:
    """
    Wire the engines together and hand them to the tool modules.

    Args:
        config: Application settings
        store: Backend to use instead of the one selected in settings

    Returns:
        The created components keyed by name
    """
    kv_store = store if store is not None else create_store(config)
    saves = SaveStore(kv_store, game_version=config.game_version)
    health_notifier = HealthNotifier()
    health_notifier.subscribe(log_health_change)

    builder = CharacterBuilder(saves, inventory_capacity=config.inventory_capacity)
    inventory = InventoryManager(saves, health_notifier, CustomItemLibrary(kv_store))
    progression = ProgressionEngine(saves, health_notifier)
    tracker = HealthTracker(saves, health_notifier)
    events = EventManager(saves, health_notifier)

    initialize_creation_tools(builder)
    initialize_save_tools(saves)
    initialize_inventory_tools(inventory)
    initialize_progression_tools(progression, tracker)
    initialize_event_tools(events)

    return {
        "store": kv_store,
        "save_store": saves,
        "notifier": health_notifier,
        "builder": builder,
        "inventory": inventory,
        "progression": progression,
        "health": tracker,
        "events": events,
    }


def register_tools(server: FastMCP) -> None:
    register_creation_tools(server)
    register_save_tools(server)
    register_inventory_tools(server)
    register_progression_tools(server)
    register_event_tools(server)


@mcp.tool()
async def server_info() -> Dict[str, Any]:
    """
    Get server status.

    Returns:
        Application name, game version, storage backend and character count
    """
    return {
        "success": True,
        "data": {
            "app_name": settings.app_name,
            "game_version": settings.game_version,
            "storage_backend": settings.storage_backend,
            "characters": len(save_store.character_ids()) if save_store else 0,
        },
    }


def main():
    """Main entry point for the MCP server."""
    global save_store

    try:
        # Create necessary directories
        settings.create_directories()

        components = build_components(settings)
        save_store = components["save_store"]

        migrated = save_store.migrate_legacy()
        if isinstance(migrated, Failure):
            logger.error("Legacy save migration failed", error=str(migrated.failure()))

        register_tools(mcp)

        logger.info(
            "Starting Wasteland Survivor MCP Server",
            version=settings.game_version,
            stdio_mode=settings.mcp_stdio_mode,
            storage_backend=settings.storage_backend,
        )

        if settings.mcp_stdio_mode:
            # Run in stdio mode for MCP
            mcp.run(transport="stdio")
        else:
            mcp.run(transport="sse")

    except KeyboardInterrupt:
        logger.info("Server shutdown requested")
        sys.exit(0)
    except Exception as e:
        logger.error("Server failed to start", error=str(e))
        sys.exit(1)


if __name__ == "__main__":
    main()
