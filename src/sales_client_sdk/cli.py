from __future__ import annotations

import argparse
import json
from typing import Any, Sequence

from .bootstrap import Services, build_services
from .config import ConfigError, load_config
from .endpoint import PRESETS, ServerEndpoint, check_connection
from .exceptions import ApiError, LocalValidationError
from .logging_config import configure_logging
from .models import ChatMessage, Page


def _emit(payload: Any) -> None:
    print(json.dumps(payload, indent=2, default=str))


def _page(result: Page) -> dict[str, Any]:
    return {"items": [item.to_wire() for item in result.items], "metadata": result.metadata}


def cmd_settings_show(services: Services, args: argparse.Namespace) -> None:
    endpoint = services.store.get_endpoint()
    _emit({"host": endpoint.host, "port": endpoint.port, "base_url": endpoint.base_url})


def cmd_settings_set(services: Services, args: argparse.Namespace) -> None:
    if args.preset:
        host, port = PRESETS[args.preset]
    else:
        current = services.store.get_endpoint()
        host = args.host or current.host
        port = args.port or current.port
    endpoint = ServerEndpoint.validated(host, port)
    services.store.set_endpoint(endpoint)
    _emit({"host": endpoint.host, "port": endpoint.port, "base_url": endpoint.base_url})


def cmd_settings_test(services: Services, args: argparse.Namespace) -> None:
    endpoint = services.store.get_endpoint()
    reachable = check_connection(endpoint.host, int(endpoint.port), services.config.connect_timeout_seconds)
    _emit({"base_url": endpoint.base_url, "reachable": reachable})


def cmd_login(services: Services, args: argparse.Namespace) -> None:
    result = services.session.login(args.email, args.password)
    _emit({"user": result.user.to_wire()})


def cmd_logout(services: Services, args: argparse.Namespace) -> None:
    services.session.logout()
    _emit({"logged_out": True})


def cmd_whoami(services: Services, args: argparse.Namespace) -> None:
    user = services.session.refresh_user_data()
    _emit(user.to_wire())


def cmd_register(services: Services, args: argparse.Namespace) -> None:
    services.session.register(args.email, args.password, args.first_name, args.last_name)
    _emit({"registered": True, "email": args.email})


def cmd_activate(services: Services, args: argparse.Namespace) -> None:
    services.session.activate(args.token)
    _emit({"activated": True})


def cmd_products_list(services: Services, args: argparse.Namespace) -> None:
    filters = {"name": args.name, "min_price": args.min_price, "max_price": args.max_price}
    _emit(_page(services.products.list(filters, page=args.page, page_size=args.page_size)))


def cmd_sales_list(services: Services, args: argparse.Namespace) -> None:
    filters = {"user_id": args.user_id, "product_id": args.product_id}
    _emit(_page(services.sales.list(filters, page=args.page, page_size=args.page_size)))


def cmd_users_list(services: Services, args: argparse.Namespace) -> None:
    filters = {"name": args.name, "email": args.email, "role": args.role}
    _emit(_page(services.users.list(filters, page=args.page, page_size=args.page_size)))


def cmd_chat(services: Services, args: argparse.Namespace) -> None:
    reply = ChatMessage.from_response(services.chat.send_message(args.message))
    _emit(reply.model_dump(mode="json"))


def _add_paging(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--page", type=int, default=1)
    parser.add_argument("--page-size", type=int, default=20)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="sales-client", description="Sales backend client CLI")
    parser.add_argument("--env-file", default=None)
    subparsers = parser.add_subparsers(dest="command", required=True)

    settings_parser = subparsers.add_parser("settings")
    settings_sub = settings_parser.add_subparsers(dest="settings_command", required=True)
    settings_sub.add_parser("show").set_defaults(func=cmd_settings_show)
    set_parser = settings_sub.add_parser("set")
    set_parser.add_argument("--host")
    set_parser.add_argument("--port")
    set_parser.add_argument("--preset", choices=sorted(PRESETS))
    set_parser.set_defaults(func=cmd_settings_set)
    settings_sub.add_parser("test").set_defaults(func=cmd_settings_test)

    login_parser = subparsers.add_parser("login")
    login_parser.add_argument("--email", required=True)
    login_parser.add_argument("--password", required=True)
    login_parser.set_defaults(func=cmd_login)

    subparsers.add_parser("logout").set_defaults(func=cmd_logout)
    subparsers.add_parser("whoami").set_defaults(func=cmd_whoami)

    register_parser = subparsers.add_parser("register")
    register_parser.add_argument("--email", required=True)
    register_parser.add_argument("--password", required=True)
    register_parser.add_argument("--first-name", required=True)
    register_parser.add_argument("--last-name", required=True)
    register_parser.set_defaults(func=cmd_register)

    activate_parser = subparsers.add_parser("activate")
    activate_parser.add_argument("--token", required=True)
    activate_parser.set_defaults(func=cmd_activate)

    products_parser = subparsers.add_parser("products")
    products_sub = products_parser.add_subparsers(dest="products_command", required=True)
    products_list = products_sub.add_parser("list")
    products_list.add_argument("--name")
    products_list.add_argument("--min-price", type=float)
    products_list.add_argument("--max-price", type=float)
    _add_paging(products_list)
    products_list.set_defaults(func=cmd_products_list)

    sales_parser = subparsers.add_parser("sales")
    sales_sub = sales_parser.add_subparsers(dest="sales_command", required=True)
    sales_list = sales_sub.add_parser("list")
    sales_list.add_argument("--user-id", type=int)
    sales_list.add_argument("--product-id", type=int)
    _add_paging(sales_list)
    sales_list.set_defaults(func=cmd_sales_list)

    users_parser = subparsers.add_parser("users")
    users_sub = users_parser.add_subparsers(dest="users_command", required=True)
    users_list = users_sub.add_parser("list")
    users_list.add_argument("--name")
    users_list.add_argument("--email")
    users_list.add_argument("--role")
    _add_paging(users_list)
    users_list.set_defaults(func=cmd_users_list)

    chat_parser = subparsers.add_parser("chat")
    chat_parser.add_argument("--message", required=True)
    chat_parser.set_defaults(func=cmd_chat)

    return parser


def main(argv: Sequence[str] | None = None) -> None:
    args = build_parser().parse_args(argv)
    try:
        config = load_config(args.env_file)
    except ConfigError as exc:
        _emit({"error": "CONFIG_ERROR", "message": str(exc)})
        raise SystemExit(2) from exc
    configure_logging(config.log_level)
    services = build_services(config)
    try:
        args.func(services, args)
    except ApiError as exc:
        _emit({"error": exc.code, "message": exc.message})
        raise SystemExit(1) from exc
    except LocalValidationError as exc:
        _emit({"error": "VALIDATION_ERROR", "message": exc.message, "field": exc.field})
        raise SystemExit(1) from exc


if __name__ == "__main__":
    main()
