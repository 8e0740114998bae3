"""Tests for configuration change broadcasting."""

from unittest.mock import MagicMock, patch

from enrollment.services.broadcaster import FORM_CONFIGURATION_CHANNEL, Broadcaster


def test_disabled_broadcaster_creates_no_client():
    with patch("enrollment.services.broadcaster.pusher.Pusher") as mock_pusher:
        broadcaster = Broadcaster(enabled=False)
        broadcaster.trigger_configuration("FormFieldsChanged", "created", [1])

    mock_pusher.assert_not_called()
    assert broadcaster.client is None


def test_enabled_broadcaster_sends_on_configuration_channel():
    with patch("enrollment.services.broadcaster.pusher.Pusher") as mock_pusher:
        broadcaster = Broadcaster(enabled=True)

    broadcaster.trigger_configuration("DocumentRequirementsChanged", "reordered", (3, 1))

    mock_pusher.return_value.trigger.assert_called_once_with(
        FORM_CONFIGURATION_CHANNEL,
        "DocumentRequirementsChanged",
        {"action": "reordered", "ids": [3, 1]},
    )


def test_trigger_failure_is_logged_not_raised(caplog):
    with patch("enrollment.services.broadcaster.pusher.Pusher"):
        broadcaster = Broadcaster(enabled=True)
    broadcaster.client = MagicMock()
    broadcaster.client.trigger.side_effect = ConnectionError("soketi down")

    broadcaster.trigger("form-configuration", "FormFieldsChanged", {"action": "deleted", "ids": [2]})

    assert "soketi down" in caplog.text


def test_get_instance_is_a_singleton():
    Broadcaster._instance = None
    with patch("enrollment.services.broadcaster.pusher.Pusher"):
        assert Broadcaster.get_instance() is Broadcaster.get_instance()
