from dataclasses import dataclass, field

import consoletools.formatter
import consoletools.term


@dataclass
class Task:
    name: str
    priority: int
    done: bool = False
    tags: list[str] = field(default_factory=list)


TASKS = [
    Task("Write docs", 2, tags=["docs"]),
    Task("Fix crash on startup", 0, tags=["bug", "urgent"]),
    Task("Release", 1, done=True),
]

if __name__ == "__main__":
    console = consoletools.term.get_console()

    formatter = (
        consoletools.formatter.Formatter.EMPTY.with_(
            "name",
            lambda t: t.name,
            lambda v: v.with_padded_length_from(TASKS),
        )
        .with_typed(
            "priority",
            lambda t: t.priority,
            lambda v: v.with_auto_color(lambda p: "red" if p == 0 else None),
        )
        .with_condition("done", lambda t: t.done)
        .with_list_function(
            "tags",
            lambda t: t.tags,
            lambda f: f.with_("tag", lambda tag: tag),
        )
    )

    template = (
        "?done{[green:v]}?!done{ } $name+ [auto:P$priority]"
        "?!done{ @tags{#$tag,\\, }}"
    )

    for task in TASKS:
        console.write_line(formatter.format(template, task))
