import pytest

from topo_profile.canvas import Capabilities, DisplayContext, ProfileContainer
from topo_profile.models import Itinerary, Leg, ProfileParams, Step, parse_elevation


@pytest.fixture
def profile_params():
    return ProfileParams()

@pytest.fixture
def hilly_steps():
    """Three steps: two with samples spanning 120-280 ft, one without."""
    return (
        Step(
            distance=500.0,
            street_name="Main St",
            elevation=parse_elevation("0,36.576,250,45.72,500,60.96"),
        ),
        Step(
            distance=300.0,
            street_name="Oak Ave",
            elevation=parse_elevation("0,60.96,300,85.344"),
        ),
        Step(distance=50.0),
    )

@pytest.fixture
def flat_steps():
    """Steps carrying no elevation samples at all."""
    return (
        Step(distance=200.0, street_name="Elm St"),
        Step(distance=100.0, street_name="Pine St"),
    )

@pytest.fixture
def hilly_itinerary(hilly_steps):
    return Itinerary(legs=(Leg(steps=hilly_steps),))

@pytest.fixture
def flat_itinerary(flat_steps):
    return Itinerary(legs=(Leg(steps=flat_steps),))

@pytest.fixture
def make_context():
    """Build a DisplayContext with explicit capabilities."""
    def _make(canvas=True, text=True, height=220.0, leg_index=0, container=None):
        return DisplayContext(
            container=container if container is not None else ProfileContainer(),
            height=height,
            capabilities=Capabilities(canvas=canvas, text=text),
            leg_index=leg_index,
        )
    return _make
