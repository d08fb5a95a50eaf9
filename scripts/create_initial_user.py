"""Utility script to create the first administrator in the database."""

from __future__ import annotations

import argparse
from getpass import getpass

from app.application.errors import ActivityTrackerError
from app.application.use_cases.users import register_user
from app.domain.entities import UserRole
from app.infrastructure.database import SessionLocal, initialize_database


def parse_args() -> argparse.Namespace:
    """Parse command line arguments for administrator creation."""

    parser = argparse.ArgumentParser(
        description="Cria o administrador inicial da API Plano de Ação.",
    )
    parser.add_argument(
        "--name",
        default="Administrador",
        help="Nome de exibição do usuário (padrão: Administrador)",
    )
    parser.add_argument(
        "--email",
        default="admin@example.com",
        help="E-mail do usuário (padrão: admin@example.com)",
    )
    parser.add_argument(
        "--password",
        default=None,
        help="Senha do usuário. Se omitida será solicitada interativamente.",
    )
    return parser.parse_args()


def main() -> None:
    """Create an administrator using the provided command line arguments."""

    args = parse_args()

    password = args.password or getpass("Informe a senha do usuário: ")
    if not password:
        raise SystemExit("Nenhuma senha válida foi informada.")

    initialize_database()

    session = SessionLocal()
    try:
        user = register_user(
            session,
            email=args.email,
            password=password,
            name=args.name,
            role=UserRole.ADMIN,
        )
    except ActivityTrackerError as exc:
        raise SystemExit(f"Não foi possível criar o usuário: {exc.message}") from exc
    else:
        print(
            "Usuário criado com sucesso:\n"
            f"  ID: {user.id}\n"
            f"  Nome: {user.name}\n"
            f"  Email: {user.email}\n"
            f"  Perfil: {user.role.value}"
        )
    finally:
        session.close()


if __name__ == "__main__":
    main()
