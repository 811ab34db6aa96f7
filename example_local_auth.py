"""
Example: Local Server Authentication (Development Only)

Authenticates through the browser, lists your task lists, adds a task to the
default list and shows how conditional reads avoid refetching unchanged data.

IMPORTANT: This is for NON-PRODUCTION use only!

Prerequisites:
1. Create a Google Cloud Project and enable the Google Tasks API
2. Create OAuth 2.0 credentials (Desktop application type)
3. Download the credentials as 'credentials.json'
4. Add http://localhost:8080 to authorized redirect URIs in Google Console

Usage:
    python example_local_auth.py
"""

import asyncio
import logging

from gtasks import TasksService, Task, Success, TasksClientError


async def main():
    print("=" * 60)
    print("Google Tasks Example")
    print("=" * 60)
    print()

    try:
        service = TasksService.from_file("credentials.json", "token.json")
    except FileNotFoundError:
        print("ERROR: credentials.json not found!")
        print("Please download your OAuth credentials from Google Cloud Console")
        print("and save them as 'credentials.json' in this directory.")
        return

    async with service:
        try:
            print("Your task lists:")
            async for tasklist in service.iter_tasklists():
                print(f"  - {tasklist.title} ({tasklist.id})")
            print()

            created = (await service.insert_task("@default", Task(title="Try the gtasks client"))).payload
            print(f"Created task {created.id}")

            outcome = await service.list_tasks("@default")
            etag = outcome.payload.etag
            outcome = await service.list_tasks("@default", etag=etag)
            if isinstance(outcome, Success):
                print("Default list changed since the last read")
            else:
                print("Default list unchanged since the last read")

            await service.delete_task("@default", created.id)
            print(f"Deleted task {created.id}")
        except TasksClientError as e:
            print(f"Request failed: {e}")


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    asyncio.run(main())
