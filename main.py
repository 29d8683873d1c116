# ============================================================================
# main.py — Projenin CLI Giriş Noktası (Entry Point)
# ============================================================================
# NEDEN BU DOSYA VAR?
#   Veri aktarım betikleri ve elle kontrol için komut satırından onarım.
#
# KULLANIM:
#   python main.py --text "ÝSTANBUL"                     # Tek metin onar
#   python main.py --input rows.json                      # JSON dosyası onar
#   python main.py --input rows.json --output fixed.json  # Sonucu dosyaya yaz
#   python main.py --encode-sql "Şişli"                   # DB'ye yazma formu
#   python main.py --text "KAYSER?" --no-heuristics       # "?" tahmini kapalı
#   python main.py --serve                                # FastAPI sunucusu
# ============================================================================

import sys
import json
import argparse

from src.logger import logging


def _build_pipeline(args):
    """Config'i okur, --no-heuristics verilmişse 3. adımı kapatır."""
    from src.pipeline.repair_pipeline import RepairPipeline, RepairConfig

    config = RepairConfig.from_yaml()
    if args.no_heuristics:
        config.apply_heuristics = False
    return RepairPipeline(config)


def cmd_text(args) -> None:
    """Tek metni onarıp eski/yeni halini yazdırır."""
    pipeline = _build_pipeline(args)
    repaired = pipeline.repair_text(args.text)

    logging.info("CLI → Tek metin onarımı")
    print("\n" + "=" * 60)
    print("🔤 METİN ONARIMI")
    print("=" * 60)
    print(f"  Orijinal : {args.text}")
    print(f"  Onarılmış: {repaired}")
    print(f"  Değişti  : {'Evet' if repaired != args.text else 'Hayır'}")
    print("=" * 60)


def cmd_file(args) -> None:
    """
    JSON dosyasını onarır.

    Kök eleman liste ise kayıt seti olarak (max_batch_size kontrolüyle),
    değilse iç içe yapı olarak işlenir.
    """
    from src.utils.common import load_json, save_json

    pipeline = _build_pipeline(args)
    data = load_json(args.input)
    logging.info(f"CLI → JSON dosyası onarımı: {args.input}")

    if isinstance(data, list):
        result = pipeline.repair_batch(data)
    else:
        result = pipeline.repair(data)

    if args.output:
        save_json(result["data"], args.output)
        print(f"💾 Onarılmış veri kaydedildi → {args.output}")
    else:
        print(json.dumps(result["data"], ensure_ascii=False, indent=2, default=str))

    print(f"\n  Özet: {result['changed']} metin alanı değişti")


def cmd_encode(args) -> None:
    """Metni veritabanına yazılacak cp1254 formuna çevirir."""
    pipeline = _build_pipeline(args)
    encoded = pipeline.encode_for_sql(args.encode_sql)
    print(f"  Orijinal : {args.encode_sql}")
    print(f"  SQL formu: {encoded}")


def cmd_serve(args) -> None:
    """
    FastAPI sunucusunu başlatır.

    Varsayılan olarak localhost:8000'de çalışır.
    """
    import uvicorn

    print(f"\n🚀 FastAPI sunucusu başlatılıyor → http://{args.host}:{args.port}")
    print(f"   Docs: http://{args.host}:{args.port}/docs")
    print("   Durdurmak için Ctrl+C\n")

    uvicorn.run("app:app", host=args.host, port=args.port, reload=False)


def build_parser() -> argparse.ArgumentParser:
    """Argparse parser'ını oluşturur."""
    parser = argparse.ArgumentParser(
        prog="turkish-text-repair",
        description="Satış Raporu — Türkçe Karakter Onarım CLI Aracı",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Örnekler:
  python main.py --text "ÝSTANBUL"
  python main.py --input data/rows.json --output data/rows_fixed.json
  python main.py --encode-sql "Şişli"
  python main.py --serve --host 0.0.0.0 --port 9000
        """,
    )

    parser.add_argument(
        "--text",
        type=str,
        default=None,
        metavar="TEXT",
        help="Tek bir metni onarır",
    )
    parser.add_argument(
        "--input",
        type=str,
        default=None,
        metavar="FILE",
        help="Onarılacak JSON dosyası (liste → kayıt seti, obje → iç içe yapı)",
    )
    parser.add_argument(
        "--output",
        type=str,
        default=None,
        metavar="FILE",
        help="Onarılmış JSON'un yazılacağı dosya (--input ile)",
    )
    parser.add_argument(
        "--encode-sql",
        type=str,
        default=None,
        metavar="TEXT",
        help="Metni veritabanına yazılacak cp1254 formuna çevirir",
    )
    parser.add_argument(
        "--no-heuristics",
        action="store_true",
        help="'?' karakterleri için bağlam tahminini kapatır",
    )
    parser.add_argument(
        "--serve",
        action="store_true",
        help="FastAPI REST API sunucusunu başlatır",
    )
    parser.add_argument(
        "--host",
        type=str,
        default="127.0.0.1",
        help="API sunucu host adresi (varsayılan: 127.0.0.1)",
    )
    parser.add_argument(
        "--port",
        type=int,
        default=8000,
        help="API sunucu port numarası (varsayılan: 8000)",
    )

    return parser


# ─────────────────────────────────────────────────────────────────────────────
# ENTRY POINT
# ─────────────────────────────────────────────────────────────────────────────

def main(argv=None) -> None:
    """
    CLI argümanlarını parse edip ilgili komutu çalıştırır.
    Hiçbir komut verilmezse yardım menüsünü gösterir.
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.text is None and not any([args.input, args.encode_sql, args.serve]):
        parser.print_help()
        sys.exit(0)

    if args.text is not None:
        cmd_text(args)

    if args.input:
        cmd_file(args)

    if args.encode_sql:
        cmd_encode(args)

    if args.serve:
        cmd_serve(args)


if __name__ == "__main__":
    main()
