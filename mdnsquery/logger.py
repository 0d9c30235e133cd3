import logging

import colorama


class Logging:
    """Console output of the command line tool"""

    def error(message: str) -> None:
        logging.error(message)
        print(f"{colorama.Fore.RED}{colorama.Style.BRIGHT}[ERROR]{colorama.Style.RESET_ALL} {message}")

    def found(entry) -> None:
        logging.debug(f"Found entry {entry!r}")
        address = entry.addr_v4 if entry.addr_v4 is not None else entry.addr_v6
        print(
            f"{colorama.Fore.GREEN}{colorama.Style.BRIGHT}[FOUND]{colorama.Style.RESET_ALL} "
            f"{entry.name}  {entry.host} {address}:{entry.port}  {entry.info}"
        )
