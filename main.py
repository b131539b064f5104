from zonesync import Endpoint, background, create_provider



def main():
    # Example usage: a dry run logs every intended change without touching the API
    config = {
        "project_id": "my-stackit-project",
        "workers": 4,
        "dry_run": True,
    }

    provider = create_provider(config)
    creates = [Endpoint(dns_name="www.example.com.", record_type="A", targets=["192.0.2.10"])]
    deletes = [Endpoint(dns_name="old.example.com", record_type="CNAME", targets=["www.example.com"])]

    report = provider.apply_changes(background(), creates, [], deletes)
    print(f"Report: {report.as_dict()}")

if __name__ == "__main__":
    main()
