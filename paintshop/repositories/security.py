from __future__ import annotations

from typing import Any, Dict, List, Optional
from uuid import UUID

from sqlalchemy import or_, select, update

from paintshop.db.models.security import Usuario
from .base import BaseRepository


class UserRepository(BaseRepository):
    """Repository for user accounts (usuarios)."""

    async def get_user_by_id(self, user_id: UUID) -> Optional[Usuario]:
        stmt = select(Usuario).where(Usuario.id == user_id).execution_options(populate_existing=True)
        return await self.scalar_one_or_none(stmt)

    async def get_active_user_by_id(self, user_id: UUID) -> Optional[Usuario]:
        stmt = select(Usuario).where(Usuario.id == user_id, Usuario.ativo.is_(True))
        return await self.scalar_one_or_none(stmt)

    async def get_user_by_username(self, username: str) -> Optional[Usuario]:
        stmt = select(Usuario).where(Usuario.username == username)
        return await self.scalar_one_or_none(stmt)

    async def find_conflicting_user(
        self, *, username: Optional[str] = None, email: Optional[str] = None, exclude_id: Optional[UUID] = None
    ) -> Optional[Usuario]:
        """Return a user already holding the username or email, if any."""
        conditions = []
        if username is not None:
            conditions.append(Usuario.username == username)
        if email is not None:
            conditions.append(Usuario.email == email)
        if not conditions:
            return None
        stmt = select(Usuario).where(or_(*conditions))
        if exclude_id is not None:
            stmt = stmt.where(Usuario.id != exclude_id)
        return await self.first(stmt)

    async def list_active_users(self) -> List[Usuario]:
        stmt = select(Usuario).where(Usuario.ativo.is_(True)).order_by(Usuario.nome)
        result = await self.scalars(stmt)
        return list(result)

    async def create_user(
        self,
        *,
        username: str,
        email: str,
        nome: str,
        senha_hash: str,
        papel: str = "operator",
        ativo: bool = True,
        permissoes_customizadas: Optional[List[str]] = None,
    ) -> Usuario:
        user = Usuario(
            username=username,
            email=email,
            nome=nome,
            senha=senha_hash,
            papel=papel,
            ativo=ativo,
            permissoes_customizadas=list(permissoes_customizadas or []),
        )
        return await self.save(user, new=True)

    async def update_user(self, user_id: UUID, values: Dict[str, Any]) -> Optional[Usuario]:
        """Apply the given column values; None values are skipped."""
        values = {k: v for k, v in values.items() if v is not None}
        if not values:
            return await self.get_user_by_id(user_id)
        stmt = (
            update(Usuario)
            .where(Usuario.id == user_id)
            .values(**values)
            .execution_options(synchronize_session="fetch")
        )
        await self.execute(stmt)
        await self.commit()
        return await self.get_user_by_id(user_id)

    async def delete_user(self, user: Usuario) -> None:
        await self.delete(user)
