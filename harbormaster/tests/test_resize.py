import pytest

from harbormaster.errors import DecodeError, NotFoundError, PollTimeoutError
from harbormaster.models import NodeSnapshot, Outcome, ResizePhase
from harbormaster.modules.resize import NodeResizer

from conftest import droplet


def actions(fake_http, droplet_id=1):
    return [c.payload["type"] for c in fake_http.requests_to(f"droplets/{droplet_id}/actions")]


def status(value, locked=False, memory=1024):
    return {"droplet": droplet(memory=memory, status=value, locked=locked)}


@pytest.fixture
def one_gb_node(fake_http):
    fake_http.on("GET", "droplets", {"droplets": [droplet(memory=1024)]})
    fake_http.on("POST", "droplets/1/actions", {"action": {"status": "in-progress"}})
    return fake_http


def test_resize_to_current_size_is_a_noop(one_gb_node, do_client, sleep):
    result = do_client.resize_node("web-1", 1)

    assert result.outcome is Outcome.NOOP
    assert result.snapshot.capacity_gb == 1
    assert one_gb_node.mutations == []
    assert sleep.calls == []


def test_resize_missing_node_raises(fake_http, do_client):
    fake_http.on("GET", "droplets", {"droplets": []})

    with pytest.raises(NotFoundError):
        do_client.resize_node("ghost", 2)
    assert fake_http.mutations == []


def test_resize_happy_path(one_gb_node, do_client, sleep):
    one_gb_node.on("GET", "droplets/1", [
        # waiting for "off": reached on the 3rd poll
        status("active"), status("active"), status("off"),
        # waiting for the lock: clears on the 5th poll
        status("off", locked=True), status("off", locked=True), status("off", locked=True),
        status("off", locked=True), status("off"),
        # waiting for "active" after power on: 2nd poll
        status("new"), status("active", memory=2048),
    ])

    result = do_client.resize_node("web-1", 2)

    assert result.outcome is Outcome.CHANGED
    assert result.snapshot.status == "active"
    assert result.snapshot.capacity_gb == 2
    assert len(one_gb_node.requests_to("droplets")) == 1

    assert actions(one_gb_node) == ["shutdown", "resize", "power_on"]
    resize_call = one_gb_node.requests_to("droplets/1/actions")[1]
    assert resize_call.payload == {"type": "resize", "size": "2gb"}
    assert sleep.calls == [3.0] * 3 + [20.0] * 5 + [3.0] * 2


def test_shutdown_timeout_escalates_to_power_off(one_gb_node, do_client, sleep, settings):
    one_gb_node.on("GET", "droplets/1", [status("active")] * settings.status_attempts + [
        status("off", locked=False),
        status("active"),
    ])

    assert do_client.resize_node("web-1", 4).outcome is Outcome.CHANGED

    assert actions(one_gb_node) == ["shutdown", "power_off", "resize", "power_on"]
    assert sleep.calls[settings.status_attempts] == settings.power_off_settle_delay


def test_never_active_after_power_on_raises(one_gb_node, do_client, settings):
    one_gb_node.on("GET", "droplets/1", [status("off"), status("off")] + [status("new")] * settings.status_attempts)

    with pytest.raises(PollTimeoutError):
        do_client.resize_node("web-1", 2)
    assert actions(one_gb_node) == ["shutdown", "resize", "power_on"]


def test_resizer_walks_every_phase(fake_http, sleep, settings, do_client):
    fake_http.on("POST", "droplets/1/actions", {})
    fake_http.on("GET", "droplets/1", [status("off"), status("off"), status("active")])
    resizer = NodeResizer(do_client, settings=settings, sleep=sleep)
    seen = []
    real_enter = resizer._enter

    def spy(phase):
        seen.append(phase)
        real_enter(phase)
    resizer._enter = spy

    final = resizer.resize(NodeSnapshot.from_api(droplet()), 2)

    assert final.status == "active"
    assert seen == [
        ResizePhase.SHUTTING_DOWN,
        ResizePhase.POWERED_OFF,
        ResizePhase.RESIZING,
        ResizePhase.STARTING_UP,
        ResizePhase.ACTIVE,
    ]


def test_malformed_status_body_aborts_lock_wait(one_gb_node, do_client):
    one_gb_node.on("GET", "droplets/1", [
        status("off"),
        {"message": "service unavailable"},
        status("off", locked=True),
        status("active"),
    ])

    with pytest.raises(DecodeError):
        do_client.resize_node("web-1", 2)
    assert actions(one_gb_node) == ["shutdown", "resize"]
