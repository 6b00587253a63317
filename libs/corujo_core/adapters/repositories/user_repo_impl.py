from typing import Any

from corujo_core.core.application.cqrs import PagedResult
from corujo_core.core.domain.entities.user_entity import UserEntity
from corujo_core.core.domain.repositories.user_repository import UserRepository
from django.core.exceptions import ValidationError
from plugins.django_interface.models import User as UserModel


class UserRepoImpl(UserRepository):
    def find_by_id(self, user_id: str) -> UserEntity | None:
        try:
            m = UserModel.objects.get(id=user_id)
            return UserEntity.from_model(m)
        except (UserModel.DoesNotExist, ValidationError, ValueError):
            return None

    def find_by_email(self, email: str) -> UserEntity | None:
        m = UserModel.objects.filter(email__iexact=email).first()
        return UserEntity.from_model(m) if m else None

    def save(self, entity: UserEntity) -> UserEntity:
        data = entity.to_dict()
        data.pop("id")
        data.pop("created_at", None)
        data.pop("updated_at", None)
        m, _ = UserModel.objects.update_or_create(id=entity.id, defaults=data)
        return UserEntity.from_model(m)

    def list(
        self, filtros: dict[str, Any] | None, page: int, page_size: int
    ) -> PagedResult[UserEntity]:
        qs = UserModel.objects.all()
        if filtros:
            qs = qs.filter(**filtros)

        total = qs.count()
        offset = (page - 1) * page_size
        items = [UserEntity.from_model(m) for m in qs.order_by("nome")[offset : offset + page_size]]
        return PagedResult(items=items, total=total, page=page, page_size=page_size)
