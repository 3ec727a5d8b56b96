import argparse
import logging
import time

from core.logging_config import setup_logging
from core.scene import RenderSettings
from scene_builders.cornell_box_builder import CornellBoxBuilder
from renderers.base_renderer import RendererFactory, buffer_to_image

# 렌더러 모듈들 import (등록을 위해)
import renderers.cpu_renderer
import renderers.parallel_renderer

logger = logging.getLogger("main")


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description='CPU Ray Tracer - Cornell Box with Wood Grain')
    parser.add_argument('--renderer', '-r',
                        choices=RendererFactory.list_available(),
                        default='cpu_raytracer',
                        help='렌더러 선택')
    parser.add_argument('--width', '-w', type=int, default=800,
                        help='이미지 가로 크기')
    parser.add_argument('--height', type=int, default=600,
                        help='이미지 세로 크기')
    parser.add_argument('--seed', type=int, default=None,
                        help='난수 시드 (생략하면 실행마다 다른 노이즈/샘플)')
    parser.add_argument('--workers', type=int, default=1,
                        help='parallel_cpu_raytracer 워커 프로세스 수')
    parser.add_argument('--output', '-o', default='output.png',
                        help='출력 파일명')
    parser.add_argument('--interactive', action='store_true',
                        help='Enter 로 다시 렌더링, q 로 종료')
    parser.add_argument('--show', action='store_true',
                        help='렌더링 후 이미지 표시')
    parser.add_argument('--log-level', default='INFO',
                        help='로그 레벨')
    return parser.parse_args(argv)


def render_once(renderer, scene, settings, output: str):
    buffer = renderer.render(scene, settings)
    image = buffer_to_image(buffer, settings.width, settings.height)
    image.save(output)
    logger.info(f"이미지 저장: {output}")
    return image


def main(argv=None):
    args = parse_args(argv)
    setup_logging(args.log_level)

    # 렌더링 설정
    settings = RenderSettings(
        width=args.width,
        height=args.height,
        seed=args.seed,
        workers=args.workers,
    )

    logger.info("장면 생성 중: cornell_box")
    scene = CornellBoxBuilder(seed=args.seed).build_scene()

    logger.info(f"렌더러 생성: {args.renderer}")
    renderer = RendererFactory.create(args.renderer)
    logger.info(f"지원 기능: {', '.join(renderer.get_capabilities())}")

    start_time = time.time()
    image = render_once(renderer, scene, settings, args.output)
    elapsed = time.time() - start_time
    logger.info(f"총 실행 시간: {int(elapsed // 60)}분 {elapsed % 60:.2f}초")

    if args.show:
        image.show()

    # 원래의 스페이스바 재렌더링에 해당
    while args.interactive:
        answer = input("Enter: 다시 렌더링, q: 종료 > ").strip().lower()
        if answer == 'q':
            break
        logger.info("다시 렌더링 시작...")
        image = render_once(renderer, scene, settings, args.output)
        if args.show:
            image.show()

    return 0


if __name__ == "__main__":
    main()
