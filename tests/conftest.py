from __future__ import annotations

import logging

import pytest

from unixid.core.identity import GidPrincipal, Identity, UidPrincipal, make_identity


@pytest.fixture
def user_identity():
    return make_identity(1000, 10, 20, 30)


@pytest.fixture
def nobody_with_groups():
    """Authenticated but unmapped: groups, no uid."""
    return Identity([GidPrincipal(100, True), GidPrincipal(200)])


@pytest.fixture
def two_uids():
    return Identity([UidPrincipal(1), UidPrincipal(2), GidPrincipal(5, True)])


@pytest.fixture
def clean_unixid_logger():
    logger = logging.getLogger("unixid")
    saved = list(logger.handlers)
    for h in saved:
        logger.removeHandler(h)
    yield logger
    for h in list(logger.handlers):
        h.close()
        logger.removeHandler(h)
    for h in saved:
        logger.addHandler(h)
