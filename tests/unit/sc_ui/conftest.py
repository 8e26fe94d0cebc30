import pytest

from sc_app.api import AwsCliService, Instance, InstanceState, Profile


class FakeAwsService(AwsCliService):
    """AWS CLI stand-in serving canned profiles and instances."""

    def __init__(self, profiles=None, instances=None, region="eu-west-1"):
        super().__init__()
        self.profiles = profiles if profiles is not None else ["dev", "prod"]
        self.instances = instances if instances is not None else [
            Instance(instance_id="i-0aaa", instance_type="t3.micro", state=InstanceState.RUNNING, name="api"),
            Instance(
                instance_id="i-0bbb",
                instance_type="t3.small",
                private_ip_address="10.0.0.5",
                state=InstanceState.RUNNING,
                name="db",
            ),
        ]
        self.region = region
        self.calls = []

    def ensure_installed(self) -> None:
        self.calls.append("ensure_installed")

    def ensure_session_manager_plugin(self) -> None:
        self.calls.append("ensure_session_manager_plugin")

    def list_profiles(self):
        return list(self.profiles)

    def get_profile_region(self, name):
        return self.region

    def get_profile(self, name):
        return Profile(name=name, region=self.region)

    def list_instances(self, profile, region=None):
        self.calls.append(("list_instances", profile, region))
        return list(self.instances)


class FakeRunner:
    def __init__(self, code=0):
        self.code = code
        self.argv = None

    def run(self, argv):
        self.argv = list(argv)
        return self.code


@pytest.fixture
def fake_aws() -> FakeAwsService:
    return FakeAwsService()


@pytest.fixture
def fake_runner() -> FakeRunner:
    return FakeRunner()
