from rich.pretty import pprint

from armature import *


SPECIFICATION = {
    "name": "forge",
    "version": "0.1.0",
    "about": "Build and ship artifacts.\n\nEvery subcommand understands --verbose.",
    "flags": {
        "verbose": {"short": "v", "long": "verbose", "global": True},
    },
    "options": {
        "config": {"short": "c", "long": "config", "default": "forge.toml", "global": True},
    },
    "subcommands": {
        "build": {
            "args": {"target": {"required": True}, "profile": {"required": False}},
            "flags": {"release": {"short": "r", "long": "release"}},
            "options": {"jobs": {"short": "j", "long": "jobs", "type": "integer", "default": 4}},
        },
        "ship": {
            "options": {"tags": {"long": "tags", "multiple": True, "default": ["latest"]}},
        },
    },
}

CONFLICTING = {
    "name": "forge",
    "flags": {"verbose": {"short": "v"}},
    "options": {"version": {"short": "v"}},
}


def main(specification=SPECIFICATION, /, *, console=None):
    try:
        pprint(compile(specification), console=console)
    except CompileError as error:
        trigger(error, shell=True, fancy=True)


if __name__ == '__main__':
    main()
    main(CONFLICTING)
