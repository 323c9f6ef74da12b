"""
Scout 인덱스 관리 CLI

사용 예:
    scout create app.models:User
    scout regen app.models.User
    scout import app.models:User --chunk-size 1000
"""

import sys
import logging
import argparse
import importlib
from typing import Any, List, Optional

from scout.errors import ModelResolutionError
from scout.events import ModelsImported, get_dispatcher

logger = logging.getLogger(__name__)

ACTIONS = ["create", "drop", "regen", "flush", "import"]


def resolve_model(target: str) -> Any:
    """
    'package.module:Class' 또는 'package.module.Class' 경로의 모델 클래스 반환

    Raises:
        ModelResolutionError: 모듈 import 실패 또는 클래스 없음
    """
    if ":" in target:
        module_name, _, class_name = target.partition(":")
    else:
        module_name, _, class_name = target.rpartition(".")

    if not module_name or not class_name:
        raise ModelResolutionError(f"Invalid model path: {target}", target=target)

    try:
        module = importlib.import_module(module_name)
    except ImportError as e:
        raise ModelResolutionError(f"Cannot import module '{module_name}': {e}", target=target) from e

    model_class = getattr(module, class_name, None)
    if model_class is None:
        raise ModelResolutionError(f"Model class '{class_name}' not found in '{module_name}'", target=target)

    return model_class


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="scout", description="Scout search index manager")
    parser.add_argument("action", choices=ACTIONS)
    parser.add_argument("model", help="Fully qualified model class (module:Class)")
    parser.add_argument("--chunk-size", "-c", type=int, default=None, help="Batch size for import")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """CLI 진입점"""
    logging.basicConfig(level=logging.INFO, format='%(asctime)s - %(levelname)s - %(message)s')

    args = build_parser().parse_args(argv)

    try:
        model_class = resolve_model(args.model)
    except ModelResolutionError as e:
        logger.error(e.message)
        print(f"Error: {e.message}", file=sys.stderr)
        return 1

    model = model_class()
    engine = model.searchable_using()

    if args.action == "create":
        engine.create_struct(model)
        print(f"Search struct [{args.model}] is created.")

    elif args.action == "drop":
        engine.drop_struct(model)
        print(f"Search struct [{args.model}] is deleted.")

    elif args.action == "regen":
        engine.regen_struct(model)
        print(f"Search struct [{args.model}] is regenerated.")

    elif args.action == "flush":
        engine.flush(model)
        print(f"All [{args.model}] records have been flushed.")

    elif args.action == "import":
        def report(event: ModelsImported) -> None:
            last_key = event.models[-1].get_scout_key()
            print(f"Imported [{args.model}] models up to ID: {last_key}")

        dispatcher = get_dispatcher()
        dispatcher.listen(ModelsImported, report)
        try:
            total = model_class.make_all_searchable(args.chunk_size)
        finally:
            dispatcher.forget(ModelsImported, report)
        print(f"All [{args.model}] records have been imported ({total}).")

    return 0


if __name__ == "__main__":
    sys.exit(main())
