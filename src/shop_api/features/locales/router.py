"""Routes for currencies, countries and languages."""

from __future__ import annotations

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, Path, Query, Response, Security, status

from shop_api.api.deps import get_locales_service, get_locales_service_read
from shop_api.common.pagination import PageParams, get_page_params
from shop_api.common.search import search_query
from shop_api.common.sorting import make_sort_dependency
from shop_api.common.types import OrderBy
from shop_api.core.http import require_csrf, require_permission
from shop_db.models import User

from .schemas import (
    CountryCreate,
    CountryOut,
    CountryPage,
    CountryUpdate,
    CurrencyCreate,
    CurrencyOut,
    CurrencyPage,
    CurrencyUpdate,
    LanguageCreate,
    LanguageOut,
    LanguagePage,
    LanguageUpdate,
)
from .service import LocalesService
from .sorting import (
    COUNTRY_ID_FIELD,
    COUNTRY_SORT_FIELDS,
    CURRENCY_ID_FIELD,
    CURRENCY_SORT_FIELDS,
    DEFAULT_SORT,
    LANGUAGE_ID_FIELD,
    LANGUAGE_SORT_FIELDS,
)

router = APIRouter(tags=["locales"])

ReadService = Annotated[LocalesService, Depends(get_locales_service_read)]
WriteService = Annotated[LocalesService, Depends(get_locales_service)]
AdminUser = Annotated[User, Security(require_permission("catalog.manage"))]
SearchTerm = Annotated[str | None, Depends(search_query)]
IsActiveFilter = Annotated[bool | None, Query(description="Filter by active flag.")]
RECORD_ID_PARAM = Annotated[UUID, Path(description="Record identifier.")]

_ADMIN_RESPONSES = {
    status.HTTP_401_UNAUTHORIZED: {"description": "Authentication required."},
    status.HTTP_403_FORBIDDEN: {"description": "Administrator permission required."},
}

currency_sort = make_sort_dependency(
    allowed=CURRENCY_SORT_FIELDS, default=DEFAULT_SORT, id_field=CURRENCY_ID_FIELD
)
country_sort = make_sort_dependency(
    allowed=COUNTRY_SORT_FIELDS, default=DEFAULT_SORT, id_field=COUNTRY_ID_FIELD
)
language_sort = make_sort_dependency(
    allowed=LANGUAGE_SORT_FIELDS, default=DEFAULT_SORT, id_field=LANGUAGE_ID_FIELD
)


def _wants_currency(include: str | None) -> bool:
    return "currency" in {part.strip() for part in (include or "").split(",")}


# --- Currencies -------------------------------------------------------------


@router.get(
    "/currencies",
    response_model=CurrencyPage,
    status_code=status.HTTP_200_OK,
    summary="List currencies",
    response_model_exclude_none=True,
)
def list_currencies(
    service: ReadService,
    page: Annotated[PageParams, Depends(get_page_params)],
    order_by: Annotated[OrderBy, Depends(currency_sort)],
    search: SearchTerm,
    is_active: IsActiveFilter = None,
) -> CurrencyPage:
    return service.list_currencies(
        page=page.page,
        per_page=page.per_page,
        order_by=order_by,
        search=search,
        is_active=is_active,
    )


@router.get(
    "/currencies/{currency_id}",
    response_model=CurrencyOut,
    status_code=status.HTTP_200_OK,
    summary="Retrieve a currency",
    responses={status.HTTP_404_NOT_FOUND: {"description": "Currency not found."}},
)
def get_currency(currency_id: RECORD_ID_PARAM, service: ReadService) -> CurrencyOut:
    return service.get_currency(currency_id)


@router.post(
    "/currencies",
    dependencies=[Security(require_csrf)],
    response_model=CurrencyOut,
    status_code=status.HTTP_201_CREATED,
    summary="Create a currency (administrator only)",
    responses=_ADMIN_RESPONSES,
)
def create_currency(
    payload: CurrencyCreate, service: WriteService, _actor: AdminUser
) -> CurrencyOut:
    return service.create_currency(payload)


@router.put(
    "/currencies/{currency_id}",
    dependencies=[Security(require_csrf)],
    response_model=CurrencyOut,
    status_code=status.HTTP_200_OK,
    summary="Update a currency (administrator only)",
    responses=_ADMIN_RESPONSES,
)
def update_currency(
    currency_id: RECORD_ID_PARAM,
    payload: CurrencyUpdate,
    service: WriteService,
    _actor: AdminUser,
) -> CurrencyOut:
    return service.update_currency(currency_id, payload)


@router.delete(
    "/currencies/{currency_id}",
    dependencies=[Security(require_csrf)],
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete a currency (administrator only)",
    responses=_ADMIN_RESPONSES,
)
def delete_currency(
    currency_id: RECORD_ID_PARAM, service: WriteService, _actor: AdminUser
) -> Response:
    service.delete_currency(currency_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


# --- Countries --------------------------------------------------------------


@router.get(
    "/countries",
    response_model=CountryPage,
    status_code=status.HTTP_200_OK,
    summary="List countries",
    response_model_exclude_none=True,
)
def list_countries(
    service: ReadService,
    page: Annotated[PageParams, Depends(get_page_params)],
    order_by: Annotated[OrderBy, Depends(country_sort)],
    search: SearchTerm,
    is_active: IsActiveFilter = None,
    include: Annotated[
        str | None, Query(description="Comma-separated relations to embed (currency).")
    ] = None,
) -> CountryPage:
    return service.list_countries(
        page=page.page,
        per_page=page.per_page,
        order_by=order_by,
        search=search,
        is_active=is_active,
        include_currency=_wants_currency(include),
    )


@router.get(
    "/countries/{country_id}",
    response_model=CountryOut,
    status_code=status.HTTP_200_OK,
    summary="Retrieve a country",
    response_model_exclude_none=True,
    responses={status.HTTP_404_NOT_FOUND: {"description": "Country not found."}},
)
def get_country(
    country_id: RECORD_ID_PARAM,
    service: ReadService,
    include: Annotated[str | None, Query()] = None,
) -> CountryOut:
    return service.get_country(country_id, include_currency=_wants_currency(include))


@router.post(
    "/countries",
    dependencies=[Security(require_csrf)],
    response_model=CountryOut,
    status_code=status.HTTP_201_CREATED,
    summary="Create a country (administrator only)",
    response_model_exclude_none=True,
    responses=_ADMIN_RESPONSES,
)
def create_country(payload: CountryCreate, service: WriteService, _actor: AdminUser) -> CountryOut:
    return service.create_country(payload)


@router.put(
    "/countries/{country_id}",
    dependencies=[Security(require_csrf)],
    response_model=CountryOut,
    status_code=status.HTTP_200_OK,
    summary="Update a country (administrator only)",
    response_model_exclude_none=True,
    responses=_ADMIN_RESPONSES,
)
def update_country(
    country_id: RECORD_ID_PARAM,
    payload: CountryUpdate,
    service: WriteService,
    _actor: AdminUser,
) -> CountryOut:
    return service.update_country(country_id, payload)


@router.delete(
    "/countries/{country_id}",
    dependencies=[Security(require_csrf)],
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete a country (administrator only)",
    responses=_ADMIN_RESPONSES,
)
def delete_country(
    country_id: RECORD_ID_PARAM, service: WriteService, _actor: AdminUser
) -> Response:
    service.delete_country(country_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


# --- Languages --------------------------------------------------------------


@router.get(
    "/languages",
    response_model=LanguagePage,
    status_code=status.HTTP_200_OK,
    summary="List languages",
    response_model_exclude_none=True,
)
def list_languages(
    service: ReadService,
    page: Annotated[PageParams, Depends(get_page_params)],
    order_by: Annotated[OrderBy, Depends(language_sort)],
    search: SearchTerm,
    is_active: IsActiveFilter = None,
) -> LanguagePage:
    return service.list_languages(
        page=page.page,
        per_page=page.per_page,
        order_by=order_by,
        search=search,
        is_active=is_active,
    )


@router.get(
    "/languages/{language_id}",
    response_model=LanguageOut,
    status_code=status.HTTP_200_OK,
    summary="Retrieve a language",
    responses={status.HTTP_404_NOT_FOUND: {"description": "Language not found."}},
)
def get_language(language_id: RECORD_ID_PARAM, service: ReadService) -> LanguageOut:
    return service.get_language(language_id)


@router.post(
    "/languages",
    dependencies=[Security(require_csrf)],
    response_model=LanguageOut,
    status_code=status.HTTP_201_CREATED,
    summary="Create a language (administrator only)",
    responses=_ADMIN_RESPONSES,
)
def create_language(
    payload: LanguageCreate, service: WriteService, _actor: AdminUser
) -> LanguageOut:
    return service.create_language(payload)


@router.put(
    "/languages/{language_id}",
    dependencies=[Security(require_csrf)],
    response_model=LanguageOut,
    status_code=status.HTTP_200_OK,
    summary="Update a language (administrator only)",
    responses=_ADMIN_RESPONSES,
)
def update_language(
    language_id: RECORD_ID_PARAM,
    payload: LanguageUpdate,
    service: WriteService,
    _actor: AdminUser,
) -> LanguageOut:
    return service.update_language(language_id, payload)


@router.delete(
    "/languages/{language_id}",
    dependencies=[Security(require_csrf)],
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete a language (administrator only)",
    responses=_ADMIN_RESPONSES,
)
def delete_language(
    language_id: RECORD_ID_PARAM, service: WriteService, _actor: AdminUser
) -> Response:
    service.delete_language(language_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


__all__ = ["router"]
