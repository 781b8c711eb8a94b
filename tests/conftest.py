import logging

import pytest
from typing import Dict, List

from leadmerge import ConsolidationConfig, Consolidator, GroupMerger


@pytest.fixture
def sample_leads() -> List[Dict]:
    """Fixture providing a lead file's records with duplicates on both keys."""
    return [
        {
            "_id": "jkj238238jdsnfsj23",
            "email": "foo@bar.com",
            "firstName": "John",
            "lastName": "Smith",
            "address": "123 Street St",
            "entryDate": "2014-05-07T17:30:20+00:00"
        },
        {
            "_id": "edu45238jdsnfsj23",
            "email": "mae@bar.com",
            "firstName": "Ted",
            "lastName": "Masters",
            "address": "44 North Hampton St",
            "entryDate": "2014-05-07T17:31:20+00:00"
        },
        {
            "_id": "wabaj238238jdsnfsj23",
            "email": "bog@bar.com",
            "firstName": "Fran",
            "lastName": "Jones",
            "address": "8803 Dark St",
            "entryDate": "2014-05-07T17:31:20+00:00"
        },
        {
            "_id": "jkj238238jdsnfsj23",
            "email": "coo@bar.com",
            "firstName": "Ted",
            "lastName": "Jones",
            "address": "456 Neat St",
            "entryDate": "2014-05-07T17:32:20+00:00"
        },
        {
            "_id": "sel045238jdsnfsj23",
            "email": "foo@bar.com",
            "firstName": "John",
            "lastName": "Smith",
            "address": "123 Street St",
            "entryDate": "2014-05-07T17:32:20+00:00"
        },
        {
            "_id": "qest38238jdsnfsj23",
            "email": "foo@bar.com",
            "firstName": "John",
            "lastName": "Smith",
            "address": "123 Street St",
            "entryDate": "2014-05-07T17:32:20+00:00"
        },
        {
            "_id": "vug789238jdsnfsj23",
            "email": "foo1@bar.com",
            "firstName": "Blake",
            "lastName": "Douglas",
            "address": "123 Reach St",
            "entryDate": "2014-05-07T17:33:20+00:00"
        },
        {
            "_id": "wuj08238jdsnfsj23",
            "email": "foo@bar.com",
            "firstName": "Micah",
            "lastName": "Valmer",
            "address": "123 Street St",
            "entryDate": "2014-05-07T17:33:20+00:00"
        },
        {
            "_id": "belr28238jdsnfsj23",
            "email": "mae@bar.com",
            "firstName": "Tallulah",
            "lastName": "Smith",
            "address": "123 Water St",
            "entryDate": "2014-05-07T17:33:20+00:00"
        },
        {
            "_id": "jkj238238jdsnfsj23",
            "email": "bill@bar.com",
            "firstName": "John",
            "lastName": "Smith",
            "address": "888 Mayberry St",
            "entryDate": "2014-05-07T17:33:20+00:00"
        }
    ]


@pytest.fixture
def consolidated_sample() -> List[Dict]:
    """Fixture providing the expected consolidation of sample_leads."""
    return [
        {
            "_id": "jkj238238jdsnfsj23",
            "email": "bill@bar.com",
            "firstName": "John",
            "lastName": "Smith",
            "address": "888 Mayberry St",
            "entryDate": "2014-05-07T17:33:20+00:00"
        },
        {
            "_id": "belr28238jdsnfsj23",
            "email": "mae@bar.com",
            "firstName": "Tallulah",
            "lastName": "Smith",
            "address": "123 Water St",
            "entryDate": "2014-05-07T17:33:20+00:00"
        },
        {
            "_id": "wabaj238238jdsnfsj23",
            "email": "bog@bar.com",
            "firstName": "Fran",
            "lastName": "Jones",
            "address": "8803 Dark St",
            "entryDate": "2014-05-07T17:31:20+00:00"
        },
        {
            "_id": "wuj08238jdsnfsj23",
            "email": "foo@bar.com",
            "firstName": "Micah",
            "lastName": "Valmer",
            "address": "123 Street St",
            "entryDate": "2014-05-07T17:33:20+00:00"
        },
        {
            "_id": "vug789238jdsnfsj23",
            "email": "foo1@bar.com",
            "firstName": "Blake",
            "lastName": "Douglas",
            "address": "123 Reach St",
            "entryDate": "2014-05-07T17:33:20+00:00"
        }
    ]


@pytest.fixture
def cascading_leads() -> List[Dict]:
    """Fixture providing records that only converge on a second pass.
    
    Merging the two ``_id`` 1 records gives the survivor the email of the
    third record, which must then be merged as well.
    """
    return [
        {"_id": 1, "email": "a@x.com", "entryDate": "2020-01-01", "name": "Al"},
        {"_id": 1, "email": "b@x.com", "entryDate": "2019-01-01"},
        {"_id": 2, "email": "a@x.com", "entryDate": "2022-01-01", "phone": "555-0101"}
    ]


@pytest.fixture
def change_logger() -> logging.Logger:
    """Fixture providing a logger whose records reach caplog."""
    logger = logging.getLogger("leadmerge.tests.changes")
    for handler in logger.handlers[:]:
        logger.removeHandler(handler)
    logger.setLevel(logging.DEBUG)
    logger.propagate = True
    return logger


@pytest.fixture
def config() -> ConsolidationConfig:
    """Fixture providing the default configuration."""
    return ConsolidationConfig()


@pytest.fixture
def merger(change_logger) -> GroupMerger:
    """Fixture providing a group merger logging to change_logger."""
    return GroupMerger(logger=change_logger)


@pytest.fixture
def consolidator(config, change_logger) -> Consolidator:
    """Fixture providing a consolidator logging to change_logger."""
    return Consolidator(config, logger=change_logger)
