from pathlib import Path

import anyio

from raffle_admin.platform.logging.loguru_io import Logger
from raffle_admin.service.raffle.app.interface.i_receipt_writer import IReceiptWriter


class ReceiptFileWriter(IReceiptWriter):
    """Stores receipts as `comprobante_venta_{id}.png` under one directory."""

    def __init__(self, *, receipt_dir: Path) -> None:
        self._receipt_dir = receipt_dir

    def path_for(self, sale_id: int) -> Path:
        return self._receipt_dir / f'comprobante_venta_{sale_id}.png'

    async def save(self, *, sale_id: int, content: bytes) -> Path:
        target = anyio.Path(self.path_for(sale_id))
        await target.parent.mkdir(parents=True, exist_ok=True)
        await target.write_bytes(content)
        Logger.base.info(f'🧾 [RECEIPT] Saved receipt for sale {sale_id} at {target}')
        return Path(target)
