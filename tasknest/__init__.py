"""Tasknest core library — persisted task, category and settings state.

Public API re-exports for convenient imports:
    from tasknest import AppState, FileKeyValueStore, counts_by_filter, ...
"""

# Workspace & config
from tasknest.workspace import (
    Config,
    workspace_root,
    config_path,
    store_dir,
    log_path,
    load_config,
)

# Errors
from tasknest.errors import (
    TasknestError,
    ValidationError,
    StorageReadError,
    StorageWriteError,
)

# Storage
from tasknest.storage import (
    KeyValueStore,
    FileKeyValueStore,
    WriteBehind,
    TASKS_KEY,
    CATEGORIES_KEY,
    THEME_KEY,
    LANGUAGE_KEY,
)

# Models
from tasknest.models import (
    Task,
    Category,
    COLOR_PALETTE,
    UNCATEGORIZED_COLOR,
    DELETED_CATEGORY_COLOR,
    generate_id,
    dump_tasks,
    parse_tasks,
    dump_categories,
    parse_categories,
)

# Localization
from tasknest.i18n import (
    BASE_LOCALE,
    SUPPORTED_LOCALES,
    LANGUAGE_OPTIONS,
    translate,
    language_label,
)

# Settings
from tasknest.settings import (
    Palette,
    LIGHT_PALETTE,
    DARK_PALETTE,
    THEME_PREFERENCES,
    SystemEnvironment,
    HostEnvironment,
    SettingsState,
    resolve_locale,
    resolve_palette,
)

# Stores
from tasknest.cascade import uncategorize
from tasknest.tasks import TaskStore, find_task, resolve_category
from tasknest.categories import CategoryStore, default_categories

# View model
from tasknest.view import (
    FILTER_ALL,
    FILTER_COMPLETED,
    FILTER_INCOMPLETE,
    FILTER_UNCATEGORIZED,
    category_filter,
    counts_by_filter,
    filtered_tasks,
)

# Application state
from tasknest.state import AppState
