"""
DistinctValue - Multicast, Value-Caching, Distinct-Filtering Observables

Turns a single upstream observable into a hot observable that can be listened
to by many observers, gives synchronous access to its latest value, and skips
values equal to the previous one.
"""

__version__ = "0.1.0"

from .broadcast import (
    BroadcastDistinctValueStream,
    as_broadcast_distinct_value_stream,
    as_distinct_value_connectable,
)
from .cache import NOT_SET, ValueCell
from .connectable import (
    ConnectionMode,
    ConnectionState,
    DistinctValueConnectableObservable,
)
from .distinct import DistinctFilter
from .equality import DEFAULT_EQUALS, Equals, default_equals
from .errors import (
    ClosedSubjectError,
    DistinctValueError,
    EmptyValueError,
    PolicyEvaluationError,
    ReuseError,
    ValueCacheStateError,
)
from .operators import (
    distinct_value_connectable,
    publish_value_distinct,
    share_value_distinct,
)
from .subject import ValueSubject
from .types import DistinctValueStream

__all__ = [
    # Streams
    "DistinctValueStream",
    "DistinctValueConnectableObservable",
    "BroadcastDistinctValueStream",
    "ValueSubject",
    # Lifecycle
    "ConnectionMode",
    "ConnectionState",
    # Cache and filter
    "ValueCell",
    "DistinctFilter",
    "NOT_SET",
    # Equality policy
    "Equals",
    "DEFAULT_EQUALS",
    "default_equals",
    # Factory functions and operators
    "distinct_value_connectable",
    "publish_value_distinct",
    "share_value_distinct",
    "as_distinct_value_connectable",
    "as_broadcast_distinct_value_stream",
    # Exceptions
    "DistinctValueError",
    "EmptyValueError",
    "ReuseError",
    "PolicyEvaluationError",
    "ValueCacheStateError",
    "ClosedSubjectError",
]
