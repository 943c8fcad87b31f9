"""
Example client for the e-commerce API
"""
import sys
import uuid

import requests


def create_order(total_amount: str, api_url: str = "http://localhost:8000", correlation_id: str = None) -> dict:
    """
    Create an order and print what the service reported

    Args:
        total_amount: Order total, e.g. "150.00"
        api_url: API base URL
        correlation_id: Optional X-Correlation-ID to send

    Returns:
        Response body
    """
    headers = {}
    if correlation_id:
        headers["X-Correlation-ID"] = correlation_id

    print(f"🚀 Sending order of {total_amount} to {api_url}/api/v1/orders")

    response = requests.post(
        f"{api_url}/api/v1/orders",
        json={
            "user_id": str(uuid.uuid4()),
            "total_amount": total_amount
        },
        headers=headers,
        timeout=10
    )

    print(f"🔗 Correlation ID: {response.headers.get('X-Correlation-ID')}")

    if response.status_code != 201:
        print(f"❌ Error: {response.status_code}")
        print(response.json())
        return response.json()

    order = response.json()
    print(f"\n✅ Order created!")
    print(f"   ID: {order['id']}")
    print(f"   Status: {order['status']}")
    print(f"   Location: {response.headers.get('Location')}")
    return order


def main():
    """Entry point"""
    if len(sys.argv) < 2:
        print("Usage: python example.py <total_amount> [api_url]")
        print("Example: python example.py 150.00")
        sys.exit(1)

    total_amount = sys.argv[1]
    api_url = sys.argv[2] if len(sys.argv) > 2 else "http://localhost:8000"

    try:
        create_order(total_amount, api_url)
    except requests.exceptions.ConnectionError:
        print(f"❌ Error: Cannot connect to the API at {api_url}")
        print("Make sure the service is running: python run.py")
        sys.exit(1)


if __name__ == "__main__":
    main()
