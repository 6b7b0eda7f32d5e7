"""运行文章中的示例 -- 主驱动程序

    python -m metaprog               # 发现并运行 tests/ 下的所有示例
    python -m metaprog -v tests      # 同时输出 DEBUG 日志
"""

import argparse
import logging
import os
import sys
import unittest

LOGGER = logging.getLogger('metaprog')

# 命令参数

ARGS = argparse.ArgumentParser(
    prog='metaprog', description="Run the metaprogramming walkthrough")
# 要运行的测试：目录或者点分隔的测试名
ARGS.add_argument(
    'targets', nargs='*',
    default=[], help='Test directories or dotted test names (default: tests)'
)
# 根据v的个数确定日志级别，默认 INFO，-v 就是 DEBUG
ARGS.add_argument(
    '-v', '--verbose', action='count', dest='level',
    default=2, help='Verbose logging (repeat for more verbose)'
)
# 仅记录错误日志
ARGS.add_argument(
    '-q', '--quiet', action='store_const', const=0, dest='level',
    help='Only log errors'
)
# 日志写入文件而不是控制台
ARGS.add_argument(
    '--log-file', default=None, help='Log file (default: stderr)'
)
# 第一个失败后停止
ARGS.add_argument(
    '--failfast', action='store_true',
    default=False, help='Stop on first failure'
)
# 测试文件的匹配模式
ARGS.add_argument(
    '--pattern', default='test*.py', help='Pattern for test discovery'
)

LEVELS = (logging.ERROR, logging.WARN, logging.INFO, logging.DEBUG)


def configure_logging(level, log_file=None):
    """配置根日志器，必须在加载测试之前调用，这样才能看到示例的注册信息"""
    root_logger = logging.getLogger()
    root_logger.setLevel(LEVELS[min(level, len(LEVELS) - 1)])
    if log_file:
        handler = logging.FileHandler(log_file, 'w', 'utf-8')
        handler.setFormatter(logging.Formatter(
            '%(asctime)s - %(filename)s[line:%(lineno)d] - %(levelname)s: %(message)s'))
    else:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter('%(message)s'))
    root_logger.addHandler(handler)
    return handler


def collect_demonstrations(targets, pattern='test*.py'):
    """加载测试：目录用发现的方式加载，其他当作点分隔的测试名"""
    loader = unittest.TestLoader()
    suite = unittest.TestSuite()
    for target in targets or ['tests']:
        if os.path.isdir(target):
            suite.addTests(loader.discover(target, pattern=pattern))
        elif os.sep in target or target.endswith('.py'):
            raise FileNotFoundError("no such test directory: %s" % target)
        else:
            suite.addTests(loader.loadTestsFromName(target))
    return suite


def main(argv=None):
    """主函数

    解析参数，配置日志，加载并运行示例，返回退出码
    """
    args = ARGS.parse_args(argv)
    handler = configure_logging(args.level, args.log_file)
    try:
        try:
            suite = collect_demonstrations(args.targets, args.pattern)
        except FileNotFoundError as exc:
            LOGGER.error('%s', exc)
            return 2
        LOGGER.debug('loaded %d demonstrations', suite.countTestCases())
        runner = unittest.TextTestRunner(
            verbosity=2 if args.level else 1, failfast=args.failfast)
        result = runner.run(suite)
        return 0 if result.wasSuccessful() else 1
    finally:
        logging.getLogger().removeHandler(handler)
        handler.close()


if __name__ == '__main__':
    sys.exit(main())
