from mpm2d.configurations import Configuration

from argparse import ArgumentParser, RawTextHelpFormatter


epilog = (
    "\n\033[91m>>> Press R to [R]eset, SPACE to pause/unpause, M to switch the [M]odel,"
    " arrow keys to steer gravity!\033[0m\n"
)
parser = ArgumentParser(prog="mpm2d", epilog=epilog, formatter_class=RawTextHelpFormatter)


def add_configuration(configurations: list[Configuration]):
    newline = "\n"
    help = f"Available Configurations:\n{newline.join([f'[{i}] -> {c.name}' for i, c in enumerate(configurations)])}"
    parser.add_argument(
        "-c",
        "--configuration",
        default=0,
        nargs="?",
        help=help,
        type=int,
    )


model_help = "Choose the index of the model to start with, defaults to the one of the configuration."
parser.add_argument(
    "-m",
    "--model",
    default=None,
    nargs="?",
    help=model_help,
    type=int,
)

arch_help = "Choose the Taichi architecture to run on."
parser.add_argument(
    "-a",
    "--arch",
    default="CPU",
    nargs="?",
    choices=["CPU", "GPU", "CUDA"],
    help=arch_help,
)

debug_help = "Turn on debugging."
parser.add_argument(
    "-d",
    "--debug",
    default=False,
    action="store_true",
    help=debug_help,
)

verbose_help = "Turn on verbose logging."
parser.add_argument(
    "-v",
    "--verbose",
    default=False,
    action="store_true",
    help=verbose_help,
)
