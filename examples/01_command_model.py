"""Command models can be written out directly, as a tree of `CommandNode` objects.

Usage:
`python ./01_command_model.py > picocompletion-demo_completion`
`source picocompletion-demo_completion`
"""

import tabgen
from tabgen import CommandNode, OptionSpec

TIME_UNITS = ["NANOSECONDS", "MICROSECONDS", "MILLISECONDS", "SECONDS", "MINUTES"]

model = CommandNode(
    "picocompletion-demo",
    options=(
        OptionSpec.flag("-V", "--version"),
        OptionSpec.flag("-h", "--help"),
    ),
    subcommands={
        "sub1": CommandNode(
            "sub1",
            options=(OptionSpec.argument("--num"), OptionSpec.argument("--str")),
            description="First level subcommand 1",
        ),
        "sub2": CommandNode(
            "sub2",
            options=(
                OptionSpec.argument("--num2"),
                OptionSpec.argument("--directory", "-d", is_file=True),
            ),
            subcommands={
                "subsub1": CommandNode(
                    "subsub1",
                    options=(OptionSpec.argument("-h", "--host"),),
                    description="Second level sub-subcommand 1",
                ),
                "subsub2": CommandNode(
                    "subsub2",
                    options=(
                        OptionSpec.argument("-u", "--timeUnit", choices=TIME_UNITS),
                        OptionSpec.argument("-t", "--timeout"),
                    ),
                    description="Second level sub-subcommand 2",
                ),
            },
            description="First level subcommand 2",
        ),
    },
)

if __name__ == "__main__":
    print(tabgen.generate(tabgen.default_aliases(model.name), model), end="")
