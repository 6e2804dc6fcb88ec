"""
水果接接乐主程序入口
Hand Fruit Catch Main Entry
"""
import sys
import argparse
from fruitcatch.app import Application
from fruitcatch.utils.logger import setup_logger

logger = setup_logger("FruitCatch.Main")


def main():
    """主函数"""
    parser = argparse.ArgumentParser(description='手势接水果游戏与排行榜服务')
    parser.add_argument(
        '--config',
        type=str,
        default=None,
        help='配置文件路径（默认: config/config.yaml）'
    )
    parser.add_argument('--host', type=str, default=None, help='HTTP监听地址')
    parser.add_argument('--port', type=int, default=None, help='HTTP监听端口')
    parser.add_argument(
        '--replay',
        type=str,
        default=None,
        help='回放录制的检测数据文件，不启动HTTP服务'
    )

    args = parser.parse_args()

    logger.info("=" * 50)
    logger.info("Hand Fruit Catch Starting")
    logger.info("=" * 50)

    app = Application(config_path=args.config)
    if not app.initialize():
        logger.error("应用程序启动失败")
        sys.exit(1)

    try:
        if args.replay:
            app.replay(args.replay)
            app.cleanup()
        else:
            app.serve(host=args.host, port=args.port)
    except KeyboardInterrupt:
        logger.info("用户中断程序")
    except Exception as e:
        logger.error(f"程序异常退出: {e}", exc_info=True)
        sys.exit(1)
    finally:
        logger.info("程序退出")


if __name__ == "__main__":
    main()
