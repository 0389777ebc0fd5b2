"""The Command Line Interface for the utility, including Interactive elements.

A hybrid CLI/ICLI (Command Line Interface/Interactive Command Line Interface) that generates the INTERACTIVE part
on-the-fly based on the arguments missing from the CLI invocation, including the option that none are given.
Interactive chatter goes to stderr so that stdout stays free for ciphertext or plaintext.

Typical usage example:

    ssutils -n keygen -b 512 -s 1234
    ssutils -n encrypt -i notes.txt -o notes.enc
    python -m ssutils -n decrypt -i notes.enc -o notes.txt
"""
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0
import argparse
import contextlib
import getpass
import logging
import pathlib
import sys
import time
import typing

import ssutils
from ssutils import keygen as kg
from ssutils.randstate import RandState

log = logging.getLogger("ssutils")


class HelpData(typing.NamedTuple):
    description: str
    format: typing.Type = str
    choices: list[str] | None = None
    default: typing.Any = None
    advanced: bool = False


help_dict: dict[str, HelpData] = {
    "subcommand":
        HelpData(
            description="The available subcommands in SS Utils.",
            choices=["keygen", "encrypt", "decrypt"],
        ),
    "keygen":
        HelpData("Key generation utility."),
    "encrypt":
        HelpData("File encryption utility."),
    "decrypt":
        HelpData("File decryption utility."),
    "public_key":
        HelpData(
            description="Location of the public key file.",
            format=pathlib.Path,
            default=pathlib.Path("ss.pub"),
        ),
    "private_key":
        HelpData(
            description="Location of the private key file.",
            format=pathlib.Path,
            default=pathlib.Path("ss.priv"),
        ),
    "infile":
        HelpData(
            description="Input file, `-` for standard input.",
            format=str,
            default="-",
        ),
    "outfile":
        HelpData(
            description="Output file, `-` for standard output.",
            format=str,
            default="-",
        ),
    "bits":
        HelpData(
            description="Approximate size of the public modulus (in bits).",
            format=int,
            default=256,
        ),
    "iters":
        HelpData(
            description="Miller-Rabin iterations per prime candidate.",
            format=int,
            advanced=True,
            default=kg.DEFAULT_ITERATIONS,
        ),
    "seed":
        HelpData(
            description="Random seed. Defaults to the current UNIX time.",
            format=int,
            advanced=True,
        ),
    "username":
        HelpData(
            description="Owner recorded in the public key. Defaults to the current user.",
            format=str,
            advanced=True,
        ),
    "key_format":
        HelpData(description="On-disk key format.", choices=list(ssutils.ss.KEY_FORMATS), advanced=True,
                 default="hex"),
    "overwrite":
        HelpData(
            description="Overwrite specified destination files if they exist?",
            choices=["Y", "N"],
            default="N",
        )
}

needs = {
    "keygen": ("public_key", "private_key", "bits", "iters", "key_format"),
    "encrypt": ("public_key", "infile", "outfile"),
    "decrypt": ("private_key", "infile", "outfile"),
}

pubkey = argparse.ArgumentParser(add_help=False)
pubkey.add_argument("--public_key", "-p", type=help_dict["public_key"].format, help=help_dict["public_key"].description)
privkey = argparse.ArgumentParser(add_help=False)
privkey.add_argument("--private_key",
                     "-P",
                     type=help_dict["private_key"].format,
                     help=help_dict["private_key"].description)
streams = argparse.ArgumentParser(add_help=False)
streams.add_argument("--infile", "-i", type=help_dict["infile"].format, help=help_dict["infile"].description)
streams.add_argument("--outfile", "-o", type=help_dict["outfile"].format, help=help_dict["outfile"].description)
corep = argparse.ArgumentParser(prog="ssutils")
corep.add_argument("--version", action="version", version=f"%(prog)s {ssutils.__version__}")
corep.add_argument("--non-interactive", "-n", action="store_true", help="Enable non-interactive mode")
corep.add_argument("--advanced", "-a", action="store_true", help="Enable advanced mode, for interactive mode")
corep.add_argument("--verbose", "-v", action="count", default=0, help="Increase logging verbosity (-v, -vv)")
commands = corep.add_subparsers(dest="subcommand", title="Subcommands")

keygen = commands.add_parser("keygen", parents=[privkey, pubkey], help=help_dict["keygen"].description)
keygen.add_argument("--bits", "-b", type=help_dict["bits"].format, help=help_dict["bits"].description)
keygen.add_argument("--iters", "-i", type=help_dict["iters"].format, help=help_dict["iters"].description)
keygen.add_argument("--seed", "-s", type=help_dict["seed"].format, help=help_dict["seed"].description)
keygen.add_argument("--username", "-u", type=help_dict["username"].format, help=help_dict["username"].description)
keygen.add_argument("--format",
                    "-f",
                    dest="key_format",
                    choices=help_dict["key_format"].choices,
                    help=help_dict["key_format"].description)
keygen.add_argument("--overwrite", "-o", action="store_const", const="Y", help=help_dict["overwrite"].description)

encrypt = commands.add_parser("encrypt", parents=[pubkey, streams], help=help_dict["encrypt"].description)
decrypt = commands.add_parser("decrypt", parents=[privkey, streams], help=help_dict["decrypt"].description)


def setup_logging(verbose: int = 0) -> None:
    """Configure root logging on stderr from the -v count."""
    level = logging.WARNING
    if verbose >= 2:
        level = logging.DEBUG
    elif verbose == 1:
        level = logging.INFO
    logging.basicConfig(format="%(levelname)s %(name)s: %(message)s", level=level, stream=sys.stderr)


def errprint(*args) -> None:
    print(*args, file=sys.stderr)


def checkmodes(arg: str, mode: tuple[bool, bool]):
    helper_data = help_dict[arg]
    if (mode[0] or (helper_data.advanced and not mode[1])) and helper_data.default is not None:
        return helper_data.default
    if mode[0]:
        raise IOError(f"Argument {arg} is missing and non-interactive mode is active.")
    return helper_data


def choice_handler(arg: str, mode: tuple[bool, bool], prntr: typing.Callable = errprint):
    helper_data = checkmodes(arg, mode)
    if not isinstance(helper_data, HelpData):
        return helper_data
    prntr(f"Please specify the {arg}!")
    prntr("Description: " + helper_data.description)
    choices = helper_data.choices
    vald = set(choices)
    for choice in choices:
        defstring = " (Default)" if choice == helper_data.default else ""
        if help_dict.get(choice, None):
            prntr(f"{choice} - {help_dict[choice].description}" + defstring)
        else:
            prntr(f"{choice}" + defstring)
    if helper_data.default is not None:
        prntr("To accept default just click enter. Otherwise specify value.")
    while True:
        ch = input(f"{arg}: ")
        if ch in vald:
            return ch
        if not ch and helper_data.default is not None:
            return helper_data.default
        prntr("Please select an option from the list.")


def input_handler(arg: str, mode: tuple[bool, bool], prntr: typing.Callable = errprint):
    helper_data = checkmodes(arg, mode)
    if not isinstance(helper_data, HelpData):
        return helper_data
    prntr(f"Please specify the {arg}!")
    prntr("Description: " + helper_data.description)
    if helper_data.default is not None:
        prntr(f"Default value: {helper_data.default}")
        prntr("To accept default just click enter. Otherwise specify value.")
    cls = helper_data.format
    while True:
        ch = input(f"{arg}: ")
        if not ch and helper_data.default is not None:
            return helper_data.default
        if ch == "":
            prntr("Please provide a value.")
            continue
        try:
            return cls(ch)
        except ValueError:
            prntr(f"We could not convert your value to {cls.__name__}.")


def current_user() -> str:
    """Login name of the current user, empty if the platform cannot tell."""
    try:
        return getpass.getuser()
    except (KeyError, OSError):
        log.warning("Could not determine the current user, leaving username empty.")
        return ""


def open_stream(name: str, mode: str) -> typing.ContextManager[typing.IO]:
    """Open `name` in `mode`, mapping `-` to the matching standard stream without closing it on exit."""
    if name == "-":
        std = sys.stdin if "r" in mode else sys.stdout
        return contextlib.nullcontext(std.buffer if "b" in mode else std)
    if "b" in mode:
        return open(name, mode)
    return open(name, mode, encoding="ascii")


def run_keygen(args: argparse.Namespace, pspr: typing.Callable) -> None:
    seed = args.seed if args.seed is not None else int(time.time())
    username = args.username if args.username is not None else current_user()
    with RandState(seed) as rstate:
        n, (d, pq), (p, q) = kg.generate_key_pair(args.bits, args.iters, rstate, expose_primes=True)
    priv = ssutils.SSPrivKey(pq, d, ssutils.SSPubKey(n, username))
    for path, key in ((args.public_key, priv.pub), (args.private_key, priv)):
        key.export(path, args.key_format)
    log.info("Username: %s", username)
    log.info("p  (%d bits) = %d", p.bit_length(), p)
    log.info("q  (%d bits) = %d", q.bit_length(), q)
    log.info("n  (%d bits) = %d", n.bit_length(), n)
    log.info("pq (%d bits) = %d", pq.bit_length(), pq)
    log.info("d  (%d bits) = %d", d.bit_length(), d)
    pspr("\nKey pair generated!")


def main():
    """Core Hybrid CLI/ICLI (Command Line Interface/Interactive Command Line Interface)"""
    args = corep.parse_args()
    setup_logging(args.verbose)
    pstatus = (args.non_interactive, args.advanced)

    def pspr(text: str):
        """Print only if not in non-interactive mode."""
        if not pstatus[0]:
            errprint(text)

    pspr("Welcome to SS Utils!\n")
    try:
        if not args.subcommand:
            args.subcommand = choice_handler("subcommand", pstatus, pspr)
        for reqs in needs[args.subcommand]:
            if getattr(args, reqs, None) is None:
                if help_dict[reqs].choices is not None:
                    res = choice_handler(reqs, pstatus, pspr)
                else:
                    res = input_handler(reqs, pstatus, pspr)
                setattr(args, reqs, res)
            else:
                pspr(f"{reqs}: {getattr(args, reqs)}")
        pspr("\nInput Complete! Executing...")
        match args.subcommand:
            case "keygen":
                if args.private_key.exists() or args.public_key.exists():
                    rs = getattr(args, "overwrite", None)
                    if rs is None:
                        rs = choice_handler("overwrite", pstatus, pspr)
                    if rs == "N":
                        errprint("Destination private or public key already exists!")
                        sys.exit(1)
                run_keygen(args, pspr)
            case "encrypt":
                rpu = ssutils.SSPubKey.import_key(args.public_key)
                with open_stream(args.infile, "rb") as src, open_stream(args.outfile, "w") as dst:
                    blocks = rpu.encrypt_file(src, dst)
                log.info("Encrypted %d blocks", blocks)
            case "decrypt":
                rpk = ssutils.SSPrivKey.import_key(args.private_key)
                with open_stream(args.infile, "r") as src, open_stream(args.outfile, "wb") as dst:
                    blocks = rpk.decrypt_file(src, dst)
                log.info("Decrypted %d blocks", blocks)
    except (OSError, ValueError, RuntimeError) as exc:
        errprint(f"Error: {exc}")
        sys.exit(1)
    pspr("Thank you for using SS Utils!")
    pspr("Goodbye!")


if __name__ == "__main__":
    main()
