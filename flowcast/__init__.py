"""
Flowcast - Recurring cash-flow projection

Projects recurring incomes and expenses (weekly to annual) into future
months and aggregates them into calendar periods for dashboard reporting.

Modules
-------
- recurrence    : Frequency classification and multipliers
- validity      : Validity window filter
- projection    : Month projector
- aggregation   : Period aggregator
- summary       : Totals, counts and monthly run-rate
- serialization : Loading REST payloads / JSON files, projection export
- utils         : Shared calendar and numeric helpers

"""

from .records import RecurringRecord, FrequencyDefinition, ProjectedOccurrence
from .recurrence import FrequencyRule, FrequencyTable, classify
from .validity import is_active_for
from .projection import project_months
from .aggregation import aggregate_period
from .summary import ProjectionSummary, summarize
from . import utils
