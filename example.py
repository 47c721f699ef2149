#!/usr/bin/env python3
"""
Example usage of jqr.

This script loads a small JSON document, queries it a few ways and
converts it between JSON and YAML.
"""

import json

from jqr import JQR, JQRError, OutputMode


def main():
    """Main example function."""
    print("jqr Example")
    print("=" * 50)

    # Create sample data
    sample_data = {
        "users": [
            {
                "name": "Alice Johnson",
                "email": "alice@example.com",
                "profile": {"age": 30, "city": "New York"},
                "tags": ["reading", "hiking"]
            },
            {
                "name": "Bob Smith",
                "email": "bob@example.com",
                "profile": {"age": 25, "city": "San Francisco"},
                "tags": ["coding", "music"]
            }
        ],
        "config": {
            "version": "1.0.0",
            "limits": {"max_users": 10000}
        }
    }
    json_string = json.dumps(sample_data)

    jqr = JQR()

    print("\nWhole document:")
    print(jqr.pretty_print(json_string), end="")

    print("\nNames of users older than 26:")
    result = jqr.run(json_string, "$.users[?(@.profile.age > 26)].name")
    print(result.output, end="")

    print("\nEvery city, with locations:")
    print(JQR(show_paths=True).run(json_string, "$..city").output, end="")

    print("\nConfig as YAML:")
    yaml_text = jqr.run(json_string, "$.config", output=OutputMode.YAML).output
    print(yaml_text, end="")

    print("\nBack to JSON:")
    print(jqr.convert_to_json(yaml_text), end="")

    value, _ = jqr.load(json_string)
    emails = jqr.extract(value, "$.users[*].email")
    print(f"\nExtracted emails: {emails.to_python()}")

    print("\nA malformed query:")
    try:
        jqr.run(json_string, "$.users[")
    except JQRError as e:
        response = jqr.error_handler.handle_error(e)
        print(f"   {response.diagnostic} (exit status {response.exit_code})")


if __name__ == "__main__":
    main()
