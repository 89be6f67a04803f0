"""I/O configuration: persisted file names and workspace entry filters."""

# Entries starting with this marker are hidden and never listed
HIDDEN_PREFIX = "."

# Directories skipped during workspace listing without being walked:
# dependency caches and build output can be arbitrarily large
EXCLUDED_DIRECTORY_NAMES: frozenset[str] = frozenset(
    {
        "node_modules",
        "target",
    }
)

# Extensions (lower-case, without the dot) of files shown in a workspace
CONTENT_EXTENSIONS: frozenset[str] = frozenset(
    {
        "md",
        "markdown",
        "mdown",
    }
)

# Persisted documents, all stored under the app data directory
APP_NAME = "miku"
WORKSPACE_CONFIG_FILE = "workspace_config.json"
SETTINGS_FILE = "settings.json"
RECENT_FILES_FILE = "recent_files.json"

# Display name for a workspace whose path has no final segment (e.g. "/")
DEFAULT_WORKSPACE_NAME = "Workspace"
