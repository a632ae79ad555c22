#!/usr/bin/env python3
"""
Demonstration of modinject.

This demo shows:
1. Modules declared in any order, loaded in dependency order
2. Constants, values, factories, services and providers
3. Config blocks adjusting a provider before anything is instantiated
4. Run blocks working with fully wired instances
5. Decorators wrapping an existing service
6. Phase errors for names requested from the wrong phase
"""

import logging
from dataclasses import dataclass

from modinject import InjectionScopeError, create_injector, inject, module

# Example domain: a small notification service


@dataclass
class MailerSettings:
    host: str
    port: int
    sender: str


class MailerSettingsProvider:
    """Provider configurable from config blocks."""

    def __init__(self):
        self.host = "localhost"
        self.port = 25

    def use_host(self, host: str, port: int) -> None:
        self.host = host
        self.port = port

    @inject("SENDER")
    def get(self, sender: str) -> MailerSettings:
        return MailerSettings(self.host, self.port, sender)


@inject("mailerSettings", "log")
class Mailer:
    def __init__(self, settings: MailerSettings, log: logging.Logger):
        self.settings = settings
        self.log = log
        self.sent: list[str] = []

    def send(self, to: str, body: str) -> None:
        self.sent.append(f"{self.settings.sender} -> {to}: {body}")
        self.log.info("sent mail to %s via %s", to, self.settings.host)


@inject("mailer", "templates")
class Notifier:
    def __init__(self, mailer: Mailer, templates: dict[str, str]):
        self.mailer = mailer
        self.templates = templates

    def welcome(self, user: str) -> None:
        self.mailer.send(user, self.templates["welcome"].format(user=user))


def declare_modules() -> None:
    # The application module is declared before the modules it requires
    module("notifications", ["mail", "logging"]) \
        .value("templates", {"welcome": "Welcome aboard, {user}!"}) \
        .service("notifier", Notifier) \
        .run(["notifier", lambda notifier: notifier.welcome("ada@example.com")])

    module("mail", ["logging"]) \
        .constant("SENDER", "noreply@example.com") \
        .provider("mailerSettings", MailerSettingsProvider) \
        .service("mailer", Mailer) \
        .decorator("mailer", ["$delegate", "log", tag_mailer])

    module("logging", []) \
        .factory("log", lambda: logging.getLogger("demo"))

    module("production", ["notifications"]) \
        .config(["mailerSettingsProvider", lambda p: p.use_host("smtp.example.com", 587)])


def tag_mailer(mailer: Mailer, log: logging.Logger) -> Mailer:
    log.info("mailer decorated")
    mailer.sent.append("[decorated]")
    return mailer


def main() -> None:
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")
    declare_modules()

    print("=== Load order ===")
    injector = create_injector(["production"])
    print([m.name for m in injector.modules])

    print("\n=== Run phase ===")
    mailer = injector.get("mailer")
    print(f"Settings: {mailer.settings}")
    for line in mailer.sent:
        print(f"  {line}")

    print("\n=== Same instance everywhere ===")
    same = injector.invoke(["notifier", "mailer", lambda n, m: n.mailer is m])
    print(f"notifier.mailer is mailer: {same}")

    print("\n=== Phase errors ===")
    module("broken", ["notifications"]).config(["mailer", lambda mailer: None])
    try:
        create_injector(["broken"])
    except InjectionScopeError as e:
        print(f"Config block: {e}")

    try:
        injector.get("mailerSettingsProvider")
    except InjectionScopeError as e:
        print(f"Run phase: {e}")


if __name__ == "__main__":
    main()
