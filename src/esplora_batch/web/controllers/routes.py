from aiohttp import web

from esplora_batch.web.controllers import aggregates, indexer, version


def register_routes(app: web.Application):
    app.router.add_post("/utxos", aggregates.combined_utxos)
    app.router.add_post("/data", aggregates.combined_data)
    app.router.add_post("/baltxs", aggregates.balance_and_transactions)
    app.router.add_post("/balances", aggregates.net_balance)
    app.router.add_post("/txs", aggregates.combined_transactions)

    app.router.add_get("/fees", indexer.fee_estimates)
    app.router.add_post("/fees", indexer.fee_estimates)
    app.router.add_post("/tx", indexer.broadcast_transaction)

    app.router.add_get("/version", version.version)
