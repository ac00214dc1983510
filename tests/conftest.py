#
# Pytest Fixtures
#

# Third-party ----------------------------------------------------------------------------------------------------------
import pytest

# Local ----------------------------------------------------------------------------------------------------------------
from printip.traits import register, unregister


# Fixtures -------------------------------------------------------------------------------------------------------------

@pytest.fixture
def registered():
    """Register types for the duration of a test and unregister them afterwards."""
    types_ = []

    def _register(tp: type, category, **kwargs) -> type:
        register(tp, category, **kwargs)
        types_.append(tp)
        return tp

    yield _register

    for tp in types_:
        unregister(tp)
