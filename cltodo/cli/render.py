import click

from cltodo.schemas import Priority, TodoRead

PRIORITY_WIDTH = 9
EMPTY_NOTICE = "No todos found."

COLORS = {
    Priority.CRITICAL: "red",
    Priority.IMPORTANT: "yellow",
    Priority.NORMAL: None,
}


def format_date(todo: TodoRead, extended: bool) -> str:
    if extended:
        return todo.date.isoformat(sep=" ", timespec="seconds")
    return todo.date.strftime("%Y-%m-%d")


def format_todo(todo: TodoRead, extended: bool = False) -> str:
    line = (
        f"#{todo.id} {todo.priority.label:>{PRIORITY_WIDTH}} "
        f"{format_date(todo, extended)} {todo.text}"
    )
    color = COLORS[todo.priority]
    return click.style(line, fg=color) if color else line


def render_todos(todos: list[TodoRead], extended: bool = False) -> None:
    if not todos:
        click.echo(EMPTY_NOTICE)
        return
    for todo in todos:
        click.echo(format_todo(todo, extended))
