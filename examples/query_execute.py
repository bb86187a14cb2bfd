from ws4sqlite_client import ClientBuilder, MapBuilder, Protocol, RequestBuilder

client = (
    ClientBuilder()
    .with_url_components(Protocol.HTTP, "localhost", "mydb", port=12321)
    .with_http_auth("myUser1", "myHotPassword")
    .build()
)

with client:

    request = (
        RequestBuilder()
        .add_query("SELECT * FROM TEMP")
        .add_query("SELECT * FROM TEMP WHERE ID = :id")
        .with_values(MapBuilder().add("id", 1))
        .add_statement("INSERT INTO TEMP (ID, VAL) VALUES (0, 'ZERO')")
        .add_statement("INSERT INTO TEMP (ID, VAL) VALUES (:id, :val)")
        .with_no_fail()
        .with_values(MapBuilder().add("id", 1).add("val", "a"))
        .add_statement("INSERT INTO TEMP (ID, VAL) VALUES (:id, :val)")
        .with_values(MapBuilder().add("id", 2).add("val", "b"))
        .with_values(MapBuilder().add("id", 3).add("val", "c"))
        .build()
    )

    response = client.send(request)

    for idx, item in enumerate(response):
        # noFail statements report their failure here instead of raising
        print(idx, item.kind, item.result_set or item.rows_updated or item.rows_updated_batch or item.error)
