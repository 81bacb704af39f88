from datetime import datetime, timezone
from types import SimpleNamespace

from src.models import Session
from src.ui import schedule_view


def _session(**overrides):
    data = dict(
        id="s1",
        title="Лекция <1>",
        type="theory",
        date_start=datetime(2024, 3, 10, 10, 0, tzinfo=timezone.utc),
        date_end=datetime(2024, 3, 10, 12, 0, tzinfo=timezone.utc),
        teachers="Иванов И.И.",
        folder_link="https://drive.example/f",
        notes="Zoom: https://zoom.us/j/1, пароль 42",
    )
    data.update(overrides)
    return Session(**data)


def test_session_card_html_uses_compact_range_and_linkified_notes():
    html = schedule_view.session_card_html(_session())
    assert "Теория" in html
    assert "10 марта, 10:00 - 12:00" in html
    assert "Лекция &lt;1&gt;" in html
    assert "Ссылка на материалы" in html
    assert '<a href="https://zoom.us/j/1,"' in html
    assert "Примечания:" in html


def test_session_card_html_skips_missing_optional_fields():
    html = schedule_view.session_card_html(
        _session(type="practical", date_end=None, teachers="", folder_link=None, notes=None)
    )
    assert "Практика" in html
    assert "10 марта" in html
    assert "Ссылка на материалы" not in html
    assert "Примечания" not in html


def test_upcoming_card_html_verbose_and_empty():
    html = schedule_view.upcoming_card_html(_session(), "theory")
    assert "Ближайшая лекция" in html
    assert "10 марта 2024 г., 10:00 - 12:00" in html
    assert "Материалы занятия" in html

    empty = schedule_view.upcoming_card_html(None, "practical")
    assert "Ближайшая практика" in empty
    assert "Нет запланированных занятий" in empty


def _capture_markdown(monkeypatch):
    outputs = []

    def fake_markdown(body, *_, **__):
        outputs.append(body)

    mock_st = SimpleNamespace(markdown=fake_markdown, session_state={})
    monkeypatch.setattr(schedule_view, "st", mock_st)
    return outputs


def test_render_session_list_empty_state(monkeypatch):
    outputs = _capture_markdown(monkeypatch)
    schedule_view.render_session_list([], "future", admin=False, tz=timezone.utc)
    assert len(outputs) == 1
    assert "Нет занятий для отображения" in outputs[0]


def test_render_session_list_injects_semester_header_before_first_card(monkeypatch):
    outputs = _capture_markdown(monkeypatch)
    feb5 = _session(date_start=datetime(2025, 2, 5, 9, 0, tzinfo=timezone.utc), date_end=None)
    later = _session(id="s2", date_start=datetime(2025, 2, 6, 9, 0, tzinfo=timezone.utc), date_end=None)
    schedule_view.render_session_list([feb5, later], "future", admin=False, tz=timezone.utc)
    assert outputs[0] == "### Второй семестр"
    assert len(outputs) == 3


def test_render_session_list_no_header_when_not_first(monkeypatch):
    outputs = _capture_markdown(monkeypatch)
    jan = _session(date_start=datetime(2025, 1, 30, 9, 0, tzinfo=timezone.utc), date_end=None)
    feb5 = _session(id="s2", date_start=datetime(2025, 2, 5, 9, 0, tzinfo=timezone.utc), date_end=None)
    schedule_view.render_session_list([jan, feb5], "all", admin=False, tz=timezone.utc)
    assert "### Второй семестр" not in outputs
    assert len(outputs) == 2


def test_cards_do_not_link_non_http_folder_links():
    session = _session(folder_link="javascript:alert(1)")
    assert "javascript:" not in schedule_view.session_card_html(session)
    assert "javascript:" not in schedule_view.upcoming_card_html(session, "theory")


def test_editor_for_deleted_session_is_closed(monkeypatch):
    toasts = []
    mock_st = SimpleNamespace(session_state={schedule_view.EDITING_KEY: "gone"})
    monkeypatch.setattr(schedule_view, "st", mock_st)
    monkeypatch.setattr(schedule_view, "toast_err", toasts.append)

    def fail_form(*args, **kwargs):
        raise AssertionError("form should not be rendered")

    monkeypatch.setattr(schedule_view, "render_session_form", fail_form)
    monkeypatch.setattr(schedule_view, "save_session", fail_form)

    schedule_view.render_session_editor([_session()], timezone.utc)

    assert schedule_view.EDITING_KEY not in mock_st.session_state
    assert toasts == ["Занятие не найдено, возможно оно уже удалено"]


def test_editor_for_new_session_renders_form(monkeypatch):
    calls = []
    mock_st = SimpleNamespace(session_state={schedule_view.EDITING_KEY: schedule_view.NEW_SESSION})
    monkeypatch.setattr(schedule_view, "st", mock_st)
    monkeypatch.setattr(
        schedule_view, "render_session_form", lambda session, tz: calls.append(session) or (None, None)
    )

    schedule_view.render_session_editor([_session()], timezone.utc)

    assert calls == [None]
    assert mock_st.session_state[schedule_view.EDITING_KEY] == schedule_view.NEW_SESSION
