"""
Manual check of the four tools against the live Amadeus test environment.
Needs AMADEUS_API_KEY and AMADEUS_API_SECRET in the environment or .env.
"""
import asyncio
import json

from amadeus_mcp.config import Config
from amadeus_mcp.main import build_server


async def main():
    print("=== Configuration Check ===\n")
    api_key, api_secret = Config.credentials()
    print(f"AMADEUS_API_KEY: {'✓ Set' if api_key else '✗ Not set'}")
    print(f"AMADEUS_API_SECRET: {'✓ Set' if api_secret else '✗ Not set'}")
    if not api_key or not api_secret:
        return

    server = build_server()
    calls = [
        ("get_flights", {"origin": "LAX", "destination": "JFK", "departureDate": "2026-06-01", "maxResults": 3}),
        ("get_city", {"cityName": "Paris"}),
        ("get_tours_activities", {"latitude": 48.8566, "longitude": 2.3522}),
        ("get_hotels", {"cityCode": "PAR", "radius": 5, "radiusUnit": "KM"}),
    ]

    try:
        for name, arguments in calls:
            print(f"\n=== {name} ===\n")
            result = await server.call_tool(name, arguments)
            text = result.content[0]["text"]
            if result.isError:
                print(f"✗ {text}")
                continue
            data = json.loads(text).get("data", [])
            print(f"✓ {len(data)} result(s)")
            if data:
                print(json.dumps(data[0], indent=2)[:600])
    finally:
        await server.client.aclose()

if __name__ == "__main__":
    asyncio.run(main())
