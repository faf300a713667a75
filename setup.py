#   Copyright 2013 Red Hat, Inc.
#
#   Licensed under the Apache License, Version 2.0 (the "License");
#   you may not use this file except in compliance with the License.
#   You may obtain a copy of the License at
#
#       http://www.apache.org/licenses/LICENSE-2.0
#
#   Unless required by applicable law or agreed to in writing, software
#   distributed under the License is distributed on an "AS IS" BASIS,
#   WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
#   See the License for the specific language governing permissions and
#   limitations under the License.

from setuptools import setup
from setuptools.command.sdist import sdist as _sdist

VERSION = '1.0.0'
RELEASE = '1'

class sdist(_sdist):
    """ custom sdist command, to record the version for internal reporting """

    def run(self):
        # Create Version.py to allow internal version reporting via --version
        with open("boxfac/Version.py", 'w') as version_out:
            version_out.write('VERSION = "%s-%s"\n' % (VERSION, RELEASE))

        # Run parent constructor
        _sdist.run(self)

# Every plugin lives in boxfac_plugins/<Name>/ next to its <Name>.info file
plugins = ['VirtualBox']

packages = ['boxfac', 'boxfac_plugins', 'boxfac_plugins.ovfcommon']
package_data = { }
for plugin in plugins:
    packages.append("boxfac_plugins." + plugin)
    package_data["boxfac_plugins." + plugin] = [ plugin + '.info' ]

setup(name='boxfactory',
      version=VERSION,
      description='Box Factory Vagrant box generation tool',
      license='Apache License, Version 2.0',
      python_requires='>=3.7',
      packages=packages,
      package_data=package_data,
      scripts=['boxfactory'],
      install_requires=['zope.interface', 'lxml'],
      extras_require={'test': ['pytest']},
      cmdclass={'sdist': sdist}
      )
