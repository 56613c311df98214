from .catalog import load_catalog, get_by_name, iter_catalog, filter_catalog
from .storage import KeyValueStorage, MemoryStorage, JsonFileStorage, storage_from_settings
from .persistence import PersistenceSync, PersistedState, SCHEMA_VERSION
from .plan_store import PlanStore, coerce_quantity
from .template_store import TemplateStore, TemplateNameError
from .dashboard import summarize, compute_stats
from .charts import ChartBoard, ChartConfig, build_figure

__all__ = [
    "load_catalog",
    "get_by_name",
    "iter_catalog",
    "filter_catalog",
    "KeyValueStorage",
    "MemoryStorage",
    "JsonFileStorage",
    "storage_from_settings",
    "PersistenceSync",
    "PersistedState",
    "SCHEMA_VERSION",
    "PlanStore",
    "coerce_quantity",
    "TemplateStore",
    "TemplateNameError",
    "summarize",
    "compute_stats",
    "ChartBoard",
    "ChartConfig",
    "build_figure",
]
