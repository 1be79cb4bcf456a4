"""
ORM models for the paint-line dashboard: user accounts, hourly production
records, material configuration, item requests and 8D problem reports.

Importing this package ensures model classes are registered with the Base
metadata for Alembic and runtime usage.
"""

from .security import (  # noqa: F401
    Usuario,
)
from .production import (  # noqa: F401
    Registro,
)
from .materials import (  # noqa: F401
    ConsumptionConfiguration,
    MaterialSetting,
    ModelMaterialConsumption,
)
from .requests import (  # noqa: F401
    ItemRequest,
)
from .quality import (  # noqa: F401
    Form8D,
    Form8DDiscipline,
    IshikawaCause,
    FiveWhysAnalysis,
    ActionPlan,
)
