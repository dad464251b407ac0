import os.path

from rich.pretty import pprint

from optionalist import *

schema = {
    helpstring: {
        "describe": "The description for command.",
        "show_usage_on_error": True,
    },
    "help": {
        "type": "boolean",
        "alias": ["?", "h"],
        "alone": True,
        "describe": "Show this help.",
    },
    "init": {
        "type": "boolean",
        "alone": True,
        "describe": "Initialize your project.",
    },
    "output": {
        "required": True,
        "describe": "Specify the filename to output.",
        "example": "output_filename",
    },
    "config": {
        "default": os.path.abspath("config.json"),
        "describe": "Specify the configuration file for your project.",
        "example": "config_filename",
    },
    "watch": {
        "type": "boolean",
        "describe": "Specify when you want to set the watch mode.",
    },
    unnamed: {
        "example": "script_filename",
        "describe": "Specify the script filename(s) to execute.",
    },
}


if __name__ == '__main__':
    match options := parse(schema):
        case Alone("help"):
            print(options.helpstring, end="")
        case Alone("init"):
            pprint("initializing project")
        case Options():
            pprint(options)
