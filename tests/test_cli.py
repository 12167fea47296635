from courtshuffle.__main__ import (
    COMMANDS,
    create_completer,
    execute_command,
    format_round,
    main,
)
from courtshuffle.controllers.session import ShuffleSession


def test_simulate(capsys):
    code = main(
        [
            "simulate",
            "--players",
            "6",
            "--courts",
            "1",
            "--rounds",
            "3",
            "--seed",
            "1",
            "--attempts",
            "2",
        ]
    )

    output = capsys.readouterr().out
    assert code == 0
    assert "Round 3" in output
    assert "Fairness Report" in output


def test_simulate_reports_invalid_roster(capsys):
    code = main(["simulate", "--players", "3", "--rounds", "1"])

    assert code == 1
    assert "Error" in capsys.readouterr().out


def test_completer_knows_every_command():
    completer = create_completer()
    assert set(completer.words) == set(COMMANDS)


def test_interactive_commands_drive_a_session(capsys):
    session = ShuffleSession()

    execute_command(session, "new", ["1", "Tedd", "Tan", "Adom", "Gret", "Paul"])
    execute_command(session, "next", [])
    execute_command(session, "sitout", ["Tedd"])
    execute_command(session, "show", ["2"])
    execute_command(session, "undo", [])
    execute_command(session, "stats", [])

    output = capsys.readouterr().out
    assert session.current_round_number == 1
    assert "Sitting out" in output
    assert "Fairness Report" in output


def test_format_round_shows_removed_players_by_id():
    session = ShuffleSession()
    first = session.new_game(["Tedd", "Tan", "Adom", "Gret", "Paul"], 1)
    tedd = session.remove_player("Tedd")

    text = "\n".join(format_round(session, first, 1))

    assert "Court 1:" in text
    assert tedd.id in text
    assert "Tedd" not in text
    assert all(player.name in text for player in session.players)
