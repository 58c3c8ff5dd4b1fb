import sys

from rich.pretty import pprint

from synopsis import *

__prog__ = "baksmali"


@command(postfix="See baksmali help <command> for more information about a specific command")
def baksmali(
        *,
        help=Flag("-h", "-?", "--help", descr="Show usage information"),
        version=Flag("-v", "--version", descr="Print the version of baksmali and then exit"),
):
    pass


@baksmali.command(name="list", aliases=("l",), postfix="See baksmali help list <command> for more information")
def listing():
    """Lists various objects in a dex file."""


@listing.command(aliases=("s", "str"), inline=True)
def strings(
        file=Cardinal("file", descr="A dex/apk/oat/odex file"),
        /,
        api=Option("-a", "--api", hints=("api",), descr="The numeric api level of the file being disassembled."),
        bootclasspath=Option(
            "-b", "--bootclasspath", hints=("classpath",),
            descr="A colon separated list of the files to include in the bootclasspath",
        ),
        classpath=Option("-c", "--classpath", arity=2, hints=("classpath",), descr="Additional classpath entries"),
        *,
        help=Flag("-h", "-?", "--help", descr="Show usage information"),
        debug=Flag("--debug", hidden=True),
):
    """Lists the strings in a dex file's string table."""


helper(baksmali, Topic(
    "register-info",
    "The --register-info parameter will cause baksmali to generate comments before and after every\n"
    "instruction containing register type information about some or all registers in the method.\n"
    "\n"
    "The value of the parameter is a comma separated list of values that specify which registers\n"
    "and how much information to include.\n"
    "    ALL: all pre- and post-instruction registers\n"
    "    ARGS: any pre-instruction registers used as arguments to the instruction\n"
    "    DEST: the post-instruction register used as the output of the instruction",
))


if __name__ == '__main__':
    if len(sys.argv) > 1 and sys.argv[1] == "--tree":
        pprint(baksmali)
    else:
        baksmali.select("help")(sys.argv[1:])
