"""
Interactive read-eval-print loop for Lumen.

Each line is run in one long-lived `Session`, so variables persist between
lines. When the last statement on a line is an expression statement, its
value is echoed.

Commands:
    exit, quit   leave the REPL (EOF and Ctrl-C do the same)
    :env         list the current bindings
"""

from lumen.lumen_config import Settings
from lumen.lumen_session import RunStatus, Session
from lumen.lumen_values import display

BANNER = "Lumen REPL. Type 'exit' or 'quit' to leave."


def show_env(session: Session) -> None:
    names = session.environment.names()
    if not names:
        print("(no bindings)")
        return
    for name in names:
        print(f"{name} = {display(session.environment.values[name])}")


def start_repl(settings: Settings | None = None) -> None:
    print(BANNER)
    session = Session(settings)

    while True:
        try:
            line = input(">>> ")
        except (KeyboardInterrupt, EOFError):
            print("\nExiting Lumen REPL.")
            return

        src = line.strip()
        if not src:
            continue
        if src in ("exit", "quit"):
            print("Exiting Lumen REPL.")
            return
        if src == ":env":
            show_env(session)
            continue

        status = session.run(line)
        value = session.interpreter.last_value
        if status is RunStatus.OK and value is not None:
            print(display(value))


def main() -> None:
    start_repl()


if __name__ == "__main__":
    main()
