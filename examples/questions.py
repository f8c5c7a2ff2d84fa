import enum

import consoletools.parse
import consoletools.reading
import consoletools.term


class Food(enum.Enum):
    FISH = "fish"
    MEAT = "meat"
    VEGAN_BURGER = "vegan burger"


if __name__ == "__main__":
    console = consoletools.term.get_console()

    registry = consoletools.parse.ParserRegistry.DEFAULT.with_(
        Food, consoletools.parse.Enum(Food)
    )

    food = consoletools.reading.read_line_or_cancel(
        console,
        consoletools.reading.ReadLineConfiguration.for_type(Food, registry)
        .with_prompt("What would you like for dinner? [dark_gray:(fish)] ")
        .with_initial("fish"),
    )
    if food is None:
        console.write_line("[yellow:No dinner today, then.]")
        raise SystemExit(1)

    count = consoletools.reading.read_line(
        console,
        consoletools.reading.ReadLineConfiguration.for_type(int)
        .with_prompt("How many portions? ")
        .where(lambda x: 0 < x <= 10, "[red:please order between 1 and 10 portions]")
        .with_max_attempts(3),
    )

    confirmed = consoletools.reading.read_char(
        console,
        consoletools.reading.ReadCharConfiguration()
        .with_prompt(f"Order {count} x {food.value}? [dark_gray:(y/n)] ")
        .with_option("y", True)
        .with_option("n", False),
    )

    if confirmed:
        console.write_line("[green:Your order is on its way!]")
    else:
        console.write_line("Maybe next time.")
