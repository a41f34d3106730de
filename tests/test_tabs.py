from svte.tabs import EXITED_MARKER, MAX_TITLE_LENGTH, TabState, sanitize_title


def test_new_tab_configures_and_spawns(tab_manager, view, config):
    tab_id = tab_manager.new_tab()
    tab = tab_manager.get(tab_id)
    session = tab.session
    assert tab.title == "Terminal 1"
    assert tab.state is TabState.ACTIVE
    assert session.theme.name == "gruvbox"
    assert session.font == (config["font_family"], config["font_size"])
    assert session.scrollback == config["scrollback_lines"]
    assert session.shell == "/bin/zsh"
    assert "grab_focus" in session.calls
    assert view.titles == ["Terminal 1"]
    assert view.current == 0
    assert view.show_tabs is False


def test_shell_falls_back_without_env(make_tab_manager):
    manager = make_tab_manager({})
    manager.new_tab()
    assert manager.current.session.shell == "/bin/bash"


def test_default_titles_and_custom_title(tab_manager, view):
    tab_manager.new_tab()
    tab_manager.new_tab("build")
    tab_manager.new_tab()
    assert [t.title for t in tab_manager.tabs] == ["Terminal 1", "build", "Terminal 3"]
    assert tab_manager.tab_counter == 3
    assert view.show_tabs is True


def test_counter_is_never_reused(tab_manager):
    first = tab_manager.new_tab()
    tab_manager.new_tab()
    tab_manager.close_tab(first)
    tab_manager.new_tab()
    assert [t.title for t in tab_manager.tabs] == ["Terminal 2", "Terminal 3"]


def test_close_middle_tab_keeps_current_on_third(tab_manager, view, shutdown):
    ids = [tab_manager.new_tab() for _ in range(3)]
    third = tab_manager.get(ids[2])
    assert tab_manager.current_index == 2

    middle = tab_manager.get(ids[1])
    tab_manager.close_tab(ids[1])

    assert len(tab_manager) == 2
    assert tab_manager.current is third
    assert tab_manager.current_index == 1
    assert view.current == 1
    assert middle.state is TabState.REMOVED
    assert middle.session.destroyed
    assert view.titles == ["Terminal 1", "Terminal 3"]
    assert shutdown.count == 0


def test_close_current_selects_same_index(tab_manager):
    ids = [tab_manager.new_tab() for _ in range(3)]
    tab_manager.jump_to(1)
    tab_manager.close_tab(ids[1])
    assert tab_manager.current.id == ids[2]


def test_close_last_position_selects_new_last(tab_manager):
    ids = [tab_manager.new_tab() for _ in range(3)]
    tab_manager.close_tab(ids[2])
    assert tab_manager.current.id == ids[1]


def test_close_after_current_keeps_current(tab_manager):
    ids = [tab_manager.new_tab() for _ in range(3)]
    tab_manager.jump_to(0)
    tab_manager.close_tab(ids[2])
    assert tab_manager.current.id == ids[0]


def test_closing_every_tab_requests_shutdown_once(tab_manager, shutdown):
    ids = [tab_manager.new_tab() for _ in range(2)]
    tab_manager.close_tab(ids[0])
    assert shutdown.count == 0
    tab_manager.close_tab(ids[1])
    assert shutdown.count == 1
    assert tab_manager.current is None
    tab_manager.close_tab(ids[1])
    assert shutdown.count == 1


def test_close_unknown_tab_is_ignored(tab_manager, shutdown):
    tab_manager.new_tab()
    tab_manager.close_tab(999)
    assert len(tab_manager) == 1
    assert shutdown.count == 0


def test_close_current(tab_manager, shutdown):
    tab_manager.close_current()
    assert shutdown.count == 0
    tab_manager.new_tab()
    tab_manager.close_current()
    assert shutdown.count == 1


def test_view_close_button_closes_tab(tab_manager, view):
    tab_manager.new_tab()
    tab_manager.new_tab()
    view.closers[0]()
    assert [t.title for t in tab_manager.tabs] == ["Terminal 2"]


def test_next_and_prev_wrap(tab_manager):
    for _ in range(3):
        tab_manager.new_tab()
    tab_manager.next_tab()
    assert tab_manager.current_index == 0
    tab_manager.prev_tab()
    assert tab_manager.current_index == 2
    tab_manager.prev_tab()
    assert tab_manager.current_index == 1


def test_next_tab_single_tab_is_noop(tab_manager, view):
    tab_manager.new_tab()
    view.current = -5
    tab_manager.next_tab()
    tab_manager.prev_tab()
    assert tab_manager.current_index == 0
    assert view.current == -5


def test_navigation_on_empty_manager(tab_manager):
    tab_manager.next_tab()
    tab_manager.prev_tab()
    tab_manager.jump_to(0)
    assert tab_manager.current is None


def test_jump_to(tab_manager):
    for _ in range(3):
        tab_manager.new_tab()
    tab_manager.jump_to(0)
    assert tab_manager.current_index == 0
    tab_manager.jump_to(3)
    tab_manager.jump_to(-1)
    assert tab_manager.current_index == 0


def test_exit_marks_tab_but_keeps_it(tab_manager, view, shutdown):
    tab_manager.new_tab()
    tab_manager.new_tab()
    session = tab_manager.tabs[0].session
    session.exit(0)
    tab = tab_manager.tabs[0]
    assert tab.state is TabState.EXITED
    assert tab.title == "Terminal 1" + EXITED_MARKER
    assert view.titles[0] == tab.title
    assert len(tab_manager) == 2
    assert shutdown.count == 0


def test_last_tab_exit_requests_shutdown_once(tab_manager, shutdown):
    tab_manager.new_tab()
    session = tab_manager.current.session
    session.exit(0)
    assert shutdown.count == 1
    assert len(tab_manager) == 0
    assert session.destroyed
    session.exit(0)
    assert shutdown.count == 1


def test_exit_of_remaining_tab_after_others_closed(tab_manager, shutdown):
    ids = [tab_manager.new_tab() for _ in range(2)]
    tab_manager.close_tab(ids[0])
    tab_manager.get(ids[1]).session.exit(1)
    assert shutdown.count == 1


def test_exited_tab_then_closed_explicitly(tab_manager, shutdown):
    ids = [tab_manager.new_tab() for _ in range(2)]
    tab_manager.get(ids[0]).session.exit(0)
    tab_manager.close_tab(ids[0])
    assert shutdown.count == 0
    assert [t.id for t in tab_manager.tabs] == [ids[1]]


def test_spawn_failure_shows_error_and_keeps_tab(tab_manager, shutdown):
    tab_manager.new_tab()
    session = tab_manager.current.session
    session.fail("No such file or directory")
    tab = tab_manager.current
    assert tab.state is TabState.EXITED
    assert tab.error == "No such file or directory"
    assert session.errors == ["No such file or directory"]
    assert tab.title.endswith("(failed)")
    assert len(tab_manager) == 1
    assert shutdown.count == 0


def test_title_change(tab_manager, view):
    tab_manager.new_tab()
    tab_manager.current.session.retitle("vim notes.txt")
    assert tab_manager.current.title == "vim notes.txt"
    assert view.titles == ["vim notes.txt"]


def test_empty_title_is_ignored(tab_manager):
    tab_manager.new_tab()
    tab_manager.current.session.retitle(None)
    tab_manager.current.session.retitle("\x1b\x07  ")
    assert tab_manager.current.title == "Terminal 1"


def test_title_change_after_exit_keeps_marker(tab_manager):
    tab_manager.new_tab()
    tab_manager.new_tab()
    session = tab_manager.tabs[0].session
    session.exit(0)
    session.retitle("something")
    assert tab_manager.tabs[0].title.endswith(EXITED_MARKER)


def test_sanitize_title():
    assert sanitize_title("a\tb\n\nc") == "a b c"
    assert sanitize_title("bell\x07") == "bell"
    long = "x" * 50 + "end"
    cleaned = sanitize_title(long)
    assert len(cleaned) == MAX_TITLE_LENGTH
    assert cleaned.startswith("…")
    assert cleaned.endswith("end")


def test_page_switched_by_user(tab_manager):
    for _ in range(3):
        tab_manager.new_tab()
    tab_manager.on_page_switched(0)
    assert tab_manager.current_index == 0
    tab_manager.on_page_switched(7)
    assert tab_manager.current_index == 0


def test_page_reordered_by_user(tab_manager):
    ids = [tab_manager.new_tab() for _ in range(3)]
    tab_manager.jump_to(0)
    first = tab_manager.get(ids[0])
    tab_manager.on_page_reordered(first.session, 2)
    assert [t.id for t in tab_manager.tabs] == [ids[1], ids[2], ids[0]]
    assert tab_manager.current is first
    assert tab_manager.current_index == 2
