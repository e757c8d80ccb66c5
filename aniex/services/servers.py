from aniex.models.server import Server, ServerStatus
from aniex.services.base import BaseStore


class ServerStore(BaseStore[Server]):
    model = Server
    entity_name = "server"

    def _order_by(self) -> list:
        return [Server.number.asc(), Server.id.asc()]

    def count_online(self) -> int:
        return self.db.query(Server).filter(Server.status == ServerStatus.ONLINE.value).count()
