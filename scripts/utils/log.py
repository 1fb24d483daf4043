from colorama import Fore, Style


def h1(msg):
    print(
        f"\n\n{Fore.CYAN}-------------------------------------------------------------------------")
    print(f"{Fore.CYAN}{msg}{Style.RESET_ALL}\n")


def h2(msg):
    print(f"\n{Fore.LIGHTBLUE_EX}▸ {msg}{Style.RESET_ALL}\n")


def h3(msg):
    print(f"\t{Fore.GREEN}{msg}{Style.RESET_ALL}")


def warn(msg):
    print(f"\t{Fore.YELLOW}{msg}{Style.RESET_ALL}")


def error(msg):
    print(f"{Fore.RED}{msg}{Style.RESET_ALL}")


def info(msg):
    print(msg)


def event(evt):
    fields = ", ".join(f"{k}={v}" for k, v in evt.to_dict().items() if k != "event")
    print(f"\t\t{Fore.MAGENTA}{evt.name}{Style.RESET_ALL}({fields})")


def vault_state(vault):
    h3(f"totalAssets={vault.totalAssets()} totalSupply={vault.totalSupply()} paused={vault.isPaused()}")
    for holder, shares in vault.ledger.holders():
        info(f"\t\t{holder}: {shares} shares (~{vault.convertToAssets(shares)} assets)")
