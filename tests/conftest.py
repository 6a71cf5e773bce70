import os
import sys

import boto3
import pytest
from botocore.stub import Stubber

# Add project root to path so we can import modules
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))


@pytest.fixture
def logs_client():
    return boto3.client(
        "logs",
        region_name="us-east-1",
        aws_access_key_id="testing",
        aws_secret_access_key="testing",
    )


@pytest.fixture
def stubber(logs_client):
    with Stubber(logs_client) as stub:
        yield stub
        stub.assert_no_pending_responses()
