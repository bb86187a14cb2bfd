import logging

from ws4sqlite_client import RequestBuilder, connect

logger = logging.getLogger("ws4sqlite_client")
logger.setLevel(logging.DEBUG)
fh = logging.FileHandler("ws4sqlite.log")
fh.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(process)d %(thread)d %(message)s"))
fh.setLevel(logging.DEBUG)
logger.addHandler(fh)

with connect("http://localhost:12321/mydb") as client:
    response = client.send(RequestBuilder().add_query("SELECT 1 AS ONE").build())
    print(response[0].result_set)
