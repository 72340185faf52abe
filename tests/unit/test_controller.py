# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

import logging

import pytest

from tagsets import (
    Interaction,
    InteractionKind,
    MarkupView,
    OutOfRange,
    TagEventKind,
    TagSetController,
    TagSetMode,
    TagSetSettings,
)
from tagsets.ids import provisional_element_id, tag_element_id

PLACEHOLDER = TagSetSettings().add_tag_input_text


def _controller(**settings):
    view = MarkupView()
    controller = TagSetController(TagSetSettings(**settings), view)
    events = []
    controller.subscribe(events.append)
    return controller, view, events


def test_set_tags_round_trip_and_lazy_creation():
    controller, view, _ = _controller()
    controller.set_tags("tagSet_default", ["tag 1", "tag 2", "tag n"])
    controller.set_tags("other", [])

    assert controller.get_tags_by_tag_set_id("default") == ["tag 1", "tag 2", "tag n"]
    assert controller.get_tags_by_tag_set_id("tagSet_default") == ["tag 1", "tag 2", "tag n"]
    assert controller.get_all_tags() == {"default": ["tag 1", "tag 2", "tag n"], "other": []}
    assert controller.get_tags_by_tag_set_id("never-seen") == []
    assert view.element_ids("default") == [tag_element_id("default", k) for k in range(3)]


def test_add_then_commit_appends_and_notifies():
    controller, view, events = _controller()
    controller.set_tags("s", ["a"])

    assert controller.begin_add("tagSet_s") is True
    assert controller.mode("s") is TagSetMode.COMPOSING
    assert controller.is_locked("s")
    provisional = provisional_element_id("s", 1)
    assert view.focused == provisional
    assert f'value="{PLACEHOLDER}"' in view.markup("s")

    assert controller.save("tagSet_s", provisional, "b") is True
    assert controller.get_tags_by_tag_set_id("s") == ["a", "b"]
    assert controller.mode("s") is TagSetMode.IDLE
    assert not controller.is_locked("s")
    assert [(e.kind, e.set_id, e.key, e.label) for e in events] == [(TagEventKind.ADDED, "s", 1, "b")]
    assert "tagLabelInput" not in view.markup("s")


def test_second_add_is_rejected_while_composing():
    controller, _, _ = _controller()
    controller.set_tags("s", [])
    assert controller.begin_add("s") is True
    assert controller.begin_add("s") is False
    assert controller.begin_edit("s", "tag_0") is False
    assert controller.get_tags_by_tag_set_id("s") == []


def test_locks_are_per_set():
    controller, _, _ = _controller()
    controller.set_tags("one", ["a"])
    controller.set_tags("two", ["b"])
    assert controller.begin_add("one") is True
    assert controller.begin_edit("two", tag_element_id("two", 0)) is True
    assert controller.mode("one") is TagSetMode.COMPOSING
    assert controller.mode("two") is TagSetMode.EDITING


@pytest.mark.parametrize("value", ["", None, PLACEHOLDER])
def test_save_without_content_cancels_composition(value):
    controller, _, events = _controller()
    controller.set_tags("s", ["a"])
    controller.begin_add("s")

    assert controller.save("s", provisional_element_id("s", 1), value) is True
    assert controller.get_tags_by_tag_set_id("s") == ["a"]
    assert events == []
    assert controller.mode("s") is TagSetMode.IDLE
    assert not controller.is_locked("s")


def test_placeholder_is_matched_exactly():
    controller, _, _ = _controller()
    controller.set_tags("s", [])
    controller.begin_add("s")
    controller.save("s", "tempTag_0", PLACEHOLDER + "!")
    assert controller.get_tags_by_tag_set_id("s") == [PLACEHOLDER + "!"]


def test_edit_commit_overwrites_in_place():
    controller, view, events = _controller()
    controller.set_tags("s", ["a", "b", "c"])
    ref = tag_element_id("s", 1)

    assert controller.begin_edit("s", ref) is True
    assert view.focused == ref
    assert 'value="b"' in view.markup("s")
    assert controller.save("s", ref, "B") is True

    assert controller.get_tags_by_tag_set_id("s") == ["a", "B", "c"]
    assert [(e.kind, e.key, e.label) for e in events] == [(TagEventKind.ADDED, 1, "B")]
    assert not controller.is_locked("s")


@pytest.mark.parametrize("value", ["", PLACEHOLDER])
def test_edit_without_content_reverts(value):
    controller, view, events = _controller()
    controller.set_tags("s", ["a", "b"])
    ref = tag_element_id("s", 0)
    controller.begin_edit("s", ref)

    assert controller.save("s", ref, value) is True
    assert controller.get_tags_by_tag_set_id("s") == ["a", "b"]
    assert events == []
    assert '<span class="tagLabel view">a</span>' in view.markup("s")
    assert controller.mode("s") is TagSetMode.IDLE


def test_begin_edit_rejects_bad_targets():
    controller, _, _ = _controller()
    controller.set_tags("s", ["a"])
    assert controller.begin_edit("s", tag_element_id("s", 5)) is False
    assert controller.begin_edit("s", "tempTag_0") is False
    assert controller.begin_edit("s", "garbage") is False
    assert not controller.is_locked("s")


@pytest.mark.parametrize("ref", ["²", "tag_²", "tagSet_s-tag_٣"])
def test_non_ascii_digit_refs_are_malformed(ref):
    controller, _, events = _controller()
    controller.set_tags("s", ["a"])

    assert controller.begin_edit("s", ref) is False
    assert not controller.is_locked("s")
    with pytest.raises(OutOfRange):
        controller.delete("s", ref)

    controller.begin_edit("s", "tag_0")
    assert controller.save("s", ref, "x") is False
    assert controller.get_tags_by_tag_set_id("s") == ["a"]
    assert events == []


def test_edit_revert_logs_original_label(caplog):
    controller, _, _ = _controller()
    controller.set_tags("s", ["keep me"])
    controller.begin_edit("s", "tag_0")

    with caplog.at_level(logging.DEBUG, logger="tagsets.controller"):
        controller.save("s", "tag_0", "")

    assert "'keep me'" in caplog.text
    assert controller.get_tags_by_tag_set_id("s") == ["keep me"]


def test_negative_limit_setting_means_unlimited():
    controller, _, _ = _controller(max_tag_limit=-1)
    assert controller.settings.max_tag_limit == 0
    controller.set_tags("s", ["a", "b", "c"])
    assert controller.begin_add("s") is True


def test_save_without_open_session_is_noop():
    controller, _, events = _controller()
    controller.set_tags("s", ["a"])
    assert controller.save("s", tag_element_id("s", 0), "x") is False

    controller.begin_add("s")
    # stale reference to a different tag
    assert controller.save("s", tag_element_id("s", 0), "x") is False
    assert controller.is_locked("s")
    assert controller.save("s", "tempTag_1", "x") is True
    # double submit after the commit
    assert controller.save("s", "tempTag_1", "y") is False
    assert controller.get_tags_by_tag_set_id("s") == ["a", "x"]
    assert len(events) == 1


def test_delete_existing_tag_shifts_keys_and_notifies_once():
    controller, view, events = _controller()
    controller.set_tags("s", ["a", "b", "c", "d"])

    assert controller.delete("tagSet_s", tag_element_id("s", 1)) is True
    assert controller.get_tags_by_tag_set_id("s") == ["a", "c", "d"]
    assert [(e.kind, e.key, e.label) for e in events] == [(TagEventKind.REMOVED, 1, "b")]
    assert view.element_ids("s") == [tag_element_id("s", k) for k in range(3)]


def test_delete_provisional_tag_releases_lock_without_notification():
    controller, _, events = _controller()
    controller.set_tags("s", ["a"])
    controller.begin_add("s")

    assert controller.delete("s", provisional_element_id("s", 1)) is True
    assert controller.get_tags_by_tag_set_id("s") == ["a"]
    assert events == []
    assert not controller.is_locked("s")
    assert controller.begin_add("s") is True


def test_delete_other_tag_mid_composition_discards_provisional():
    controller, _, _ = _controller()
    controller.set_tags("s", ["a", "b"])
    controller.begin_add("s")
    controller.delete("s", tag_element_id("s", 0))
    assert controller.get_tags_by_tag_set_id("s") == ["b"]
    assert controller.mode("s") is TagSetMode.IDLE
    assert controller.save("s", "tempTag_2", "late") is False


def test_delete_out_of_range_raises():
    controller, _, events = _controller()
    controller.set_tags("s", ["a"])
    with pytest.raises(OutOfRange):
        controller.delete("s", tag_element_id("s", 3))
    with pytest.raises(OutOfRange):
        controller.delete("s", "garbage")
    assert controller.get_tags_by_tag_set_id("s") == ["a"]
    assert events == []


def test_max_tag_limit_boundary_is_inclusive():
    controller, _, _ = _controller(max_tag_limit=2)
    controller.set_tags("s", ["a", "b"])

    # at the limit one more add may still begin
    assert controller.begin_add("s") is True
    controller.save("s", "tempTag_2", "c")
    assert controller.get_tags_by_tag_set_id("s") == ["a", "b", "c"]

    assert controller.begin_add("s") is False
    assert not controller.is_locked("s")


def test_zero_limit_is_unlimited():
    controller, _, _ = _controller(max_tag_limit=0)
    controller.set_tags("s", [str(n) for n in range(50)])
    assert controller.begin_add("s") is True


def test_non_editable_set_rejects_everything_but_keeps_tags():
    controller, view, events = _controller()
    controller.set_tags("s", ["a", "b", "c"])
    controller.set_tags_editable("s", False)

    markup = view.markup("s")
    assert "addTagBtn" not in markup
    assert "tagDeleteBtn" not in markup
    assert controller.begin_add("s") is False
    assert controller.begin_edit("s", tag_element_id("s", 0)) is False
    assert controller.delete("s", tag_element_id("s", 0)) is False
    assert controller.get_tags_by_tag_set_id("s") == ["a", "b", "c"]
    assert events == []
    assert not controller.is_locked("s")

    controller.set_tags_editable("s", "true")
    assert "addTagBtn" in view.markup("s")
    assert controller.begin_add("s") is True


def test_set_tags_editable_mid_edit_releases_lock():
    controller, _, _ = _controller()
    controller.set_tags("s", ["a"])
    controller.begin_edit("s", tag_element_id("s", 0))
    controller.set_tags_editable("s", False)
    assert not controller.is_locked("s")
    assert controller.mode("s") is TagSetMode.IDLE


def test_set_tags_mid_composition_forces_idle():
    controller, _, _ = _controller()
    controller.set_tags("s", ["a"])
    controller.begin_add("s")
    controller.set_tags("s", ["x", "y"])
    assert not controller.is_locked("s")
    assert controller.get_tags_by_tag_set_id("s") == ["x", "y"]


def test_blur_requires_submit_on_blur():
    controller, _, _ = _controller()
    controller.set_tags("s", [])
    controller.begin_add("s")
    assert controller.blur("s", "tempTag_0", "x") is False
    assert controller.is_locked("s")


def test_blur_and_submit_are_equivalent():
    outcomes = []
    for action in ("blur", "submit"):
        controller, view, events = _controller(submit_on_blur=True)
        controller.set_tags("s", ["a"])
        controller.begin_add("s")
        getattr(controller, action)("s", "tempTag_1", "b")
        controller.begin_edit("s", tag_element_id("s", 0))
        getattr(controller, action)("s", tag_element_id("s", 0), "")
        outcomes.append((controller.get_all_tags(), [(e.kind, e.key) for e in events], view.markup("s")))
    assert outcomes[0] == outcomes[1]


def test_dispatch_routes_interactions():
    controller, _, events = _controller()
    controller.set_tags("s", ["a"])

    assert controller.dispatch(Interaction(InteractionKind.ADD, "tagSet_s")) is True
    assert controller.dispatch(Interaction(InteractionKind.SUBMIT, "tagSet_s", "tempTag_1", "b")) is True
    assert controller.dispatch(Interaction(InteractionKind.EDIT, "tagSet_s", tag_element_id("s", 0))) is True
    assert controller.dispatch(Interaction(InteractionKind.SUBMIT, "tagSet_s", tag_element_id("s", 0), "A")) is True
    assert controller.dispatch(Interaction(InteractionKind.DELETE, "tagSet_s", tag_element_id("s", 1))) is True
    assert controller.dispatch(Interaction(InteractionKind.DELETE, "tagSet_s")) is False

    assert controller.get_tags_by_tag_set_id("s") == ["A"]
    assert [e.kind for e in events] == [TagEventKind.ADDED, TagEventKind.ADDED, TagEventKind.REMOVED]


def test_never_locked_between_completed_transitions():
    controller, _, _ = _controller()
    controller.set_tags("s", ["a", "b"])
    steps = [
        lambda: (controller.begin_add("s"), controller.save("s", "tempTag_2", "c")),
        lambda: (controller.begin_add("s"), controller.save("s", "tempTag_3", "")),
        lambda: (controller.begin_add("s"), controller.delete("s", "tempTag_3")),
        lambda: (controller.begin_edit("s", "tag_0"), controller.save("s", "tag_0", "")),
        lambda: (controller.begin_edit("s", "tag_1"), controller.save("s", "tag_1", "bb")),
        lambda: controller.delete("s", "tag_2"),
    ]
    for step in steps:
        assert not controller.is_locked("s")
        step()
        assert not controller.is_locked("s")
    assert controller.get_tags_by_tag_set_id("s") == ["a", "bb"]


def test_controllers_do_not_cross_notify():
    first, _, first_events = _controller()
    second, _, second_events = _controller()
    first.set_tags("s", ["a"])
    second.set_tags("s", ["a"])
    first.delete("s", "tag_0")
    assert len(first_events) == 1
    assert second_events == []
    assert second.get_tags_by_tag_set_id("s") == ["a"]


def test_config_mapping_accepts_widget_keys():
    controller = TagSetController({"addTagInputText": "Type here", "maxTagLimit": 1, "bogus": 1})
    assert controller.settings.add_tag_input_text == "Type here"
    assert controller.settings.max_tag_limit == 1
    controller.set_tags("s", [])
    controller.begin_add("s")
    controller.save("s", "tempTag_0", "Type here")
    assert controller.get_tags_by_tag_set_id("s") == []
