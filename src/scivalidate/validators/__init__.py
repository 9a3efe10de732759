"""Built-in validators.

Importing this package registers the validators with
:class:`~scivalidate.core.registry.ValidatorRegistry`.

- ``series``: :class:`SeriesValidator` (RMSE / MBE of two time series)
- ``scatter``: :class:`ScatterValidator` (linear regression of found vs expected)
"""

from scivalidate.validators._utils import ChartLabels
from scivalidate.validators.scatter import ScatterSettings, ScatterValidator
from scivalidate.validators.series import SeriesSettings, SeriesValidator

__all__ = [
    "ChartLabels",
    "ScatterSettings",
    "ScatterValidator",
    "SeriesSettings",
    "SeriesValidator",
]
