from __future__ import annotations

from psi_cardinality_poc.cardinality_protocol.test_vectors import scenarios


def main() -> int:
    data = scenarios.load_vectors()
    errors = scenarios.validate_vectors(data)
    if errors:
        for error in errors:
            print(f"scenarios.json: {error}")
        return 1
    print("scenarios.json: OK")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
