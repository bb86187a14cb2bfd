import asyncio

from ws4sqlite_client import ClientBuilder, RequestBuilder, ServerOperationError


async def main():
    request = (
        RequestBuilder()
        .add_statement("INSERT INTO SECRETS (ID, VAL) VALUES (:id, :val)")
        .with_values({"id": 1, "val": "top secret"})
        .with_encoder("myEncryptionKey", "VAL", compression_level=3)
        .add_query("SELECT * FROM SECRETS")
        .with_decoder("myEncryptionKey", "VAL")
        .build()
    )

    client = (
        ClientBuilder()
        .with_url("http://localhost:12321/mydb")
        .with_inline_auth("myUser1", "myHotPassword")
        .with_timeout(10)
        .build_async()
    )

    async with client:
        try:
            response = await client.send(request)
        except ServerOperationError as e:
            print(f"sub-request {e.req_idx} failed with HTTP {e.code}: {e.message}")
            return

    print(response[1].result_set)


asyncio.run(main())
