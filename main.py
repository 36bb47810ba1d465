from forge import (
    OptionSchema,
    OptionsMixin,
    ServiceDefinition,
    create_service,
    mock,
    register_service,
    set_default_credentials,
)


class RealStorage(OptionsMixin):
    def list_buckets(self):
        raise NotImplementedError("network access is provided by the real backend")


class MockStorage(OptionsMixin):
    def list_buckets(self):
        return ["mock-bucket"]


def main():
    # Example usage of the service factory
    register_service(ServiceDefinition(
        "storage",
        OptionSchema.builder().requires("api_key").recognizes("region", "timeout").secrets("api_key").build(),
        real=RealStorage,
        mock=MockStorage,
    ))
    set_default_credentials({"api_key": "AKIAEXAMPLE", "region": "us-west-1"})

    real_storage = create_service("storage", {"region": "eu-west-1", "timeout": "30"})
    mock()
    mock_storage = create_service("storage", {"region": None})

    print(f"Real Storage: {type(real_storage).__name__} {real_storage.options}")
    print(f"Mock Storage: {type(mock_storage).__name__} {mock_storage.options}")
    print(f"Mock buckets: {mock_storage.list_buckets()}")

if __name__ == "__main__":
    main()
